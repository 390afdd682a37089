"""
Ingredient aggregate and its append-only price ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from shared.config.constants import ErrorMessages, Limits, Precision
from shared.utils.clock import ensure_utc, utcnow
from shared.utils.validators import require_positive_decimal, require_text

from costing_api.domain.lifecycle import AuditableAggregate, new_id


@dataclass(frozen=True, slots=True)
class PriceEntry:
    """
    One immutable ledger entry.

    Attributes:
        ingredient_id: Owning ingredient
        price: Unit price, two decimals, strictly positive
        effective_at: Aware UTC instant the price became effective
        id: Entry identity
    """

    ingredient_id: str
    price: Decimal
    effective_at: datetime
    id: str = field(default_factory=new_id)


@dataclass(kw_only=True)
class Ingredient(AuditableAggregate):
    """
    Ingredient aggregate root.

    Price entries are kept in insertion order; they are never edited or
    removed once appended.
    """

    name: str
    supplier: str
    price_entries: list[PriceEntry] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        name: str,
        supplier: str,
        prices: Iterable[tuple[Any, datetime | None]] = (),
    ) -> "Ingredient":
        """
        Build a new, unsaved ingredient.

        Args:
            name: Display name, trimmed, 1..255 chars
            supplier: Supplier name, trimmed, 1..255 chars
            prices: Optional seed ledger as (price, effective_at) pairs;
                a missing instant means "now"

        Raises:
            InvalidArgumentError: On any invalid field or seed price
        """
        ingredient = cls(
            name=require_text(name, "name", Limits.MAX_NAME_LENGTH),
            supplier=require_text(supplier, "supplier", Limits.MAX_SUPPLIER_LENGTH),
        )
        for price, effective_at in prices:
            ingredient.add_price(price, effective_at)
        return ingredient

    def add_price(self, price: Any, effective_at: datetime | None = None) -> PriceEntry:
        """
        Append a price to the ledger.

        Entries sharing an instant are allowed; the latest-price rule
        resolves the tie.

        Raises:
            InvalidArgumentError: If price is not a number greater than zero.
                The ledger is left untouched.
        """
        amount = require_positive_decimal(
            price,
            "price",
            Precision.PRICE,
            ErrorMessages.INVALID_PRICE,
            maximum=Limits.MAX_PRICE,
        )
        entry = PriceEntry(
            ingredient_id=self.id,
            price=amount,
            effective_at=ensure_utc(effective_at) if effective_at else utcnow(),
        )
        self.price_entries.append(entry)
        return entry

    def latest_price(self) -> PriceEntry | None:
        """
        Entry with the greatest effective instant, or None for an empty ledger.

        On equal instants the entry appended last wins.
        """
        latest: PriceEntry | None = None
        for entry in self.price_entries:
            if latest is None or entry.effective_at >= latest.effective_at:
                latest = entry
        return latest
