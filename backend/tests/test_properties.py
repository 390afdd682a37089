"""
Property-based tests with Hypothesis.

Covers the latest-price rule and the cost arithmetic.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock

from hypothesis import given, settings, strategies as st

from costing_api.domain import Ingredient, Recipe
from costing_api.services import CostCalculator, PriceResolver
from shared.infrastructure.cache import InMemoryPriceCache


BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)

prices = st.decimals(
    min_value=Decimal("0.01"), max_value=Decimal("10000"), places=2, allow_nan=False, allow_infinity=False
)
quantities = st.decimals(
    min_value=Decimal("0.0001"), max_value=Decimal("1000"), places=4, allow_nan=False, allow_infinity=False
)


class TestLatestPriceProperties:

    @given(st.lists(st.tuples(prices, st.integers(min_value=0, max_value=5)), min_size=1, max_size=20))
    @settings(max_examples=100)
    def test_latest_is_max_instant_then_last_appended(self, ledger):
        """Property: latest = greatest effective_at; among equals, the last appended."""
        ingredient = Ingredient.create("Flour", "Molino Sur")
        for price, day in ledger:
            ingredient.add_price(price, BASE + timedelta(days=day))

        expected_index = max(range(len(ledger)), key=lambda i: (ledger[i][1], i))

        assert ingredient.latest_price() == ingredient.price_entries[expected_index]

    @given(prices)
    def test_single_entry_is_latest(self, price):
        ingredient = Ingredient.create("Flour", "Molino Sur", [(price, BASE)])

        assert ingredient.latest_price().price == price


class TestCostProperties:

    @given(
        st.lists(
            st.tuples(st.sampled_from(["flour", "sugar", "eggs"]), quantities),
            min_size=1,
            max_size=10,
        ),
        st.fixed_dictionaries({"flour": prices, "sugar": prices, "eggs": prices}),
    )
    @settings(max_examples=100)
    def test_total_is_exact_sum_of_line_costs(self, lines, unit_prices):
        """Property: total = sum(quantity * unit price) with no intermediate rounding."""
        store = Mock()
        store.latest_price.side_effect = unit_prices.get
        store.find_by_ids.return_value = []
        calculator = CostCalculator(store, PriceResolver(store, InMemoryPriceCache(), ttl_seconds=300))
        recipe = Recipe.create("Cake", None, lines)

        breakdown = calculator.calculate(recipe, use_cache=False)

        expected = sum((q * unit_prices[i] for i, q in lines), Decimal("0"))
        assert breakdown.total == expected
        assert len(breakdown.lines) == len(lines)
        assert [l.ingredient_id for l in breakdown.lines] == [i for i, _ in lines]
        assert store.latest_price.call_count == len({i for i, _ in lines})
