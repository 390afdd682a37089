"""
Tests for RecipeService.

Tests cover:
- Creation and edits guarded by version
- Cost breakdown through the real stores and the in-memory price cache
- Cache staleness bounded by the TTL
- Soft delete / restore
"""

from decimal import Decimal

import pytest

from costing_api.services import UNSET
from shared.utils.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    PriceNotFoundError,
    VersionConflictError,
)


USER_ID = "11111111-1111-1111-1111-111111111111"
TTL = 300


@pytest.fixture
def cake(recipe_service, flour):
    return recipe_service.create_recipe("Cake", None, [(flour.id, "0.2")], user_id=USER_ID)


class TestRecipeCost:
    """Tests for RecipeService.get_recipe_with_cost()"""

    def test_cake_uses_latest_flour_price(self, recipe_service, cake):
        recipe, breakdown = recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)

        assert recipe.id == cake.id
        assert breakdown.lines[0].ingredient_name == "Flour"
        assert breakdown.lines[0].unit_price == Decimal("1.80")
        assert breakdown.lines[0].line_cost == Decimal("0.36")
        assert breakdown.total == Decimal("0.36")

    def test_same_ingredient_on_two_lines(self, recipe_service, sugar):
        recipe = recipe_service.create_recipe(
            "Cake", None, [(sugar.id, "0.2"), (sugar.id, "0.1")], user_id=USER_ID
        )

        _, breakdown = recipe_service.get_recipe_with_cost(recipe.id, bypass_cache=True)

        assert len(breakdown.lines) == 2
        assert breakdown.total == Decimal("0.75")

    def test_cached_price_is_stale_until_ttl(
        self, recipe_service, ingredient_service, cake, flour, clock
    ):
        _, first = recipe_service.get_recipe_with_cost(cake.id)
        ingredient_service.add_price(flour.id, "3.00", user_id=USER_ID)

        _, cached = recipe_service.get_recipe_with_cost(cake.id)
        _, exact = recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)
        clock.advance(TTL)
        _, refreshed = recipe_service.get_recipe_with_cost(cake.id)

        assert first.total == Decimal("0.36")
        assert cached.total == Decimal("0.36")
        assert exact.total == Decimal("0.60")
        assert refreshed.total == Decimal("0.60")

    def test_ingredient_without_price_fails(self, recipe_service, ingredient_service, flour):
        salt = ingredient_service.create_ingredient("Salt", "Salinas", user_id=USER_ID)
        recipe = recipe_service.create_recipe(
            "Bread", None, [(flour.id, 1), (salt.id, "0.01")], user_id=USER_ID
        )

        with pytest.raises(PriceNotFoundError):
            recipe_service.get_recipe_with_cost(recipe.id, bypass_cache=True)

    def test_price_added_after_a_miss_is_visible(self, recipe_service, ingredient_service):
        salt = ingredient_service.create_ingredient("Salt", "Salinas", user_id=USER_ID)
        recipe = recipe_service.create_recipe("Brine", None, [(salt.id, 2)], user_id=USER_ID)
        with pytest.raises(PriceNotFoundError):
            recipe_service.get_recipe_with_cost(recipe.id)

        ingredient_service.add_price(salt.id, "0.40", user_id=USER_ID)

        _, breakdown = recipe_service.get_recipe_with_cost(recipe.id)
        assert breakdown.total == Decimal("0.80")

    def test_deleted_ingredient_fails_the_calculation(
        self, recipe_service, ingredient_service, cake, flour
    ):
        ingredient_service.delete_ingredient(flour.id, user_id=USER_ID)

        with pytest.raises(NotFoundError):
            recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)

    def test_repeated_exact_calculations_match(self, recipe_service, cake):
        _, first = recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)
        _, second = recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)

        assert first == second

    def test_unknown_recipe(self, recipe_service):
        with pytest.raises(NotFoundError):
            recipe_service.get_recipe_with_cost("missing")


class TestRecipeEdits:

    def test_create_requires_lines(self, recipe_service):
        with pytest.raises(InvalidArgumentError):
            recipe_service.create_recipe("Cake", None, [], user_id=USER_ID)

    def test_update_requires_a_field(self, recipe_service, cake):
        with pytest.raises(InvalidArgumentError):
            recipe_service.update_recipe(cake.id, user_id=USER_ID)

    def test_update_name_and_description(self, recipe_service, cake):
        updated = recipe_service.update_recipe(
            cake.id, name="Sponge cake", description="Light", user_id=USER_ID
        )

        stored = recipe_service.get_recipe(cake.id)
        assert updated.version == 2
        assert stored.name == "Sponge cake"
        assert stored.description == "Light"

    def test_explicit_none_clears_description(self, recipe_service, cake):
        recipe_service.update_recipe(cake.id, description="Light", user_id=USER_ID)
        recipe_service.update_recipe(cake.id, description=None, user_id=USER_ID)

        assert recipe_service.get_recipe(cake.id).description is None

    def test_omitted_description_is_kept(self, recipe_service, cake):
        recipe_service.update_recipe(cake.id, description="Light", user_id=USER_ID)
        recipe_service.update_recipe(cake.id, name="Renamed", description=UNSET, user_id=USER_ID)

        assert recipe_service.get_recipe(cake.id).description == "Light"

    def test_stale_expected_version_conflicts(self, recipe_service, cake):
        recipe_service.update_recipe(cake.id, name="First", expected_version=1, user_id=USER_ID)

        with pytest.raises(VersionConflictError) as exc_info:
            recipe_service.update_recipe(
                cake.id, name="Second", expected_version=1, user_id=USER_ID
            )

        assert exc_info.value.actual == 2
        assert recipe_service.get_recipe(cake.id).name == "First"

    def test_add_and_remove_lines(self, recipe_service, cake, sugar):
        recipe, line = recipe_service.add_recipe_line(
            cake.id, sugar.id, "0.5", expected_version=1, user_id=USER_ID
        )
        assert recipe.version == 2

        _, breakdown = recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)
        assert breakdown.total == Decimal("1.61")

        recipe = recipe_service.remove_recipe_line(cake.id, line.id, user_id=USER_ID)
        assert recipe.version == 3
        assert len(recipe_service.get_recipe(cake.id).lines) == 1

    def test_removing_unknown_line_changes_nothing(self, recipe_service, cake):
        recipe = recipe_service.remove_recipe_line(cake.id, "missing", user_id=USER_ID)

        assert recipe.version == 1
        assert len(recipe.lines) == 1

    def test_line_may_reference_unknown_ingredient(self, recipe_service, cake):
        recipe, _ = recipe_service.add_recipe_line(cake.id, "ghost", 1, user_id=USER_ID)

        assert [l.ingredient_id for l in recipe.lines][-1] == "ghost"
        with pytest.raises(PriceNotFoundError):
            recipe_service.get_recipe_with_cost(cake.id, bypass_cache=True)


class TestRecipeLifecycle:

    def test_delete_and_restore(self, recipe_service, cake):
        recipe_service.delete_recipe(cake.id, user_id=USER_ID)

        with pytest.raises(NotFoundError):
            recipe_service.get_recipe(cake.id)
        assert recipe_service.list_recipes(10, 0) == ([], 0)

        restored = recipe_service.restore_recipe(cake.id, user_id=USER_ID)
        assert restored.version == 1
        assert restored.name == "Cake"

    def test_delete_unknown(self, recipe_service):
        with pytest.raises(NotFoundError):
            recipe_service.delete_recipe("missing", user_id=USER_ID)

    def test_update_of_deleted_recipe(self, recipe_service, cake):
        recipe_service.delete_recipe(cake.id, user_id=USER_ID)

        with pytest.raises(NotFoundError):
            recipe_service.update_recipe(cake.id, name="X", user_id=USER_ID)
