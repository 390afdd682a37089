"""
Cost breakdown records produced by the cost calculator.

Amounts keep full decimal precision; rounding to cents happens only when a
breakdown is presented.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from shared.config.constants import Precision


def round_money(amount: Decimal) -> Decimal:
    """Round an amount to cents for presentation."""
    return amount.quantize(Precision.MONEY, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class CostLine:
    line_id: str
    ingredient_id: str
    ingredient_name: str
    quantity: Decimal
    unit_price: Decimal
    line_cost: Decimal


@dataclass(frozen=True, slots=True)
class CostBreakdown:
    """Per-line costs in recipe line order plus their exact sum."""

    recipe_id: str
    lines: tuple[CostLine, ...]
    total: Decimal

    @classmethod
    def from_lines(cls, recipe_id: str, lines: list[CostLine]) -> "CostBreakdown":
        total = Decimal("0")
        for line in lines:
            total += line.line_cost
        return cls(recipe_id=recipe_id, lines=tuple(lines), total=total)
