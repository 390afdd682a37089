"""
Tests for RecipeRepository against SQLite.
"""

from decimal import Decimal

import pytest

from costing_api.domain import Recipe
from shared.utils.exceptions import NotFoundError, VersionConflictError


USER_ID = "11111111-1111-1111-1111-111111111111"


def new_cake() -> Recipe:
    recipe = Recipe.create("Cake", "Sponge", [("flour", "0.2"), ("sugar", "0.1"), ("eggs", 3)])
    recipe.set_created_by(USER_ID)
    return recipe


class TestRecipeRepository:

    def test_round_trip_keeps_line_order(self, recipe_repository):
        saved = recipe_repository.save(new_cake())

        loaded = recipe_repository.find_by_id(saved.id)

        assert loaded.name == "Cake"
        assert loaded.description == "Sponge"
        assert loaded.version == 1
        assert [l.ingredient_id for l in loaded.lines] == ["flour", "sugar", "eggs"]
        assert [l.quantity for l in loaded.lines] == [Decimal("0.2"), Decimal("0.1"), Decimal("3")]
        assert [l.id for l in loaded.lines] == [l.id for l in saved.lines]

    def test_line_edits_are_synchronised(self, recipe_repository):
        recipe = recipe_repository.save(new_cake())

        recipe.remove_line(recipe.lines[1].id)
        recipe.add_line("butter", "0.25")
        recipe_repository.save(recipe)

        loaded = recipe_repository.find_by_id(recipe.id)
        assert [l.ingredient_id for l in loaded.lines] == ["flour", "eggs", "butter"]
        assert loaded.version == 2

    def test_removing_the_first_line_keeps_the_rest_in_order(self, recipe_repository):
        recipe = recipe_repository.save(new_cake())

        recipe.remove_line(recipe.lines[0].id)
        recipe.add_line("milk", 1)
        recipe_repository.save(recipe)

        loaded = recipe_repository.find_by_id(recipe.id)
        assert [l.ingredient_id for l in loaded.lines] == ["sugar", "eggs", "milk"]

    def test_stale_save_conflicts_and_writes_nothing(self, recipe_repository):
        saved = recipe_repository.save(new_cake())
        first = recipe_repository.find_by_id(saved.id)
        second = recipe_repository.find_by_id(saved.id)

        first.rename("Chocolate cake")
        recipe_repository.save(first)

        second.rename("Lemon cake")
        second.remove_line(second.lines[0].id)
        with pytest.raises(VersionConflictError):
            recipe_repository.save(second)

        stored = recipe_repository.find_by_id(saved.id)
        assert stored.name == "Chocolate cake"
        assert stored.version == 2
        assert len(stored.lines) == 3

    def test_soft_delete_and_restore(self, recipe_repository):
        saved = recipe_repository.save(new_cake())
        before = recipe_repository.find_by_id(saved.id)

        assert recipe_repository.soft_delete(saved.id) is True
        assert recipe_repository.find_by_id(saved.id) is None
        assert recipe_repository.find_page(10, 0) == ([], 0)

        assert recipe_repository.restore(saved.id) is True
        assert recipe_repository.find_by_id(saved.id) == before

    def test_save_after_delete_is_not_found(self, recipe_repository):
        recipe = recipe_repository.save(new_cake())
        recipe_repository.soft_delete(recipe.id)

        recipe.rename("Other")
        with pytest.raises(NotFoundError):
            recipe_repository.save(recipe)

    def test_missing_recipe(self, recipe_repository):
        assert recipe_repository.find_by_id("missing") is None
        assert recipe_repository.soft_delete("missing") is False
        assert recipe_repository.restore("missing") is False
