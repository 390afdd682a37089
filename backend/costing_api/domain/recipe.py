"""
Recipe aggregate and its ingredient lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable

from shared.config.constants import ErrorMessages, Limits, Precision
from shared.utils.exceptions import InvalidArgumentError
from shared.utils.validators import (
    optional_text,
    require_identifier,
    require_positive_decimal,
    require_text,
)

from costing_api.domain.lifecycle import AuditableAggregate, new_id


@dataclass(frozen=True, slots=True)
class RecipeLine:
    """A quantity of one ingredient. The ingredient may no longer exist."""

    recipe_id: str
    ingredient_id: str
    quantity: Decimal
    id: str = field(default_factory=new_id)


@dataclass(kw_only=True)
class Recipe(AuditableAggregate):
    """
    Recipe aggregate root.

    Lines keep the order they were added in; the same ingredient may appear
    on several lines.
    """

    name: str
    description: str | None = None
    lines: list[RecipeLine] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        name: str,
        description: str | None,
        lines: Iterable[tuple[str, Any]],
    ) -> "Recipe":
        """
        Build a new, unsaved recipe from (ingredient_id, quantity) pairs.

        Raises:
            InvalidArgumentError: Invalid name/description, no lines, or an
                invalid line
        """
        recipe = cls(name=require_text(name, "name", Limits.MAX_NAME_LENGTH))
        recipe.describe(description)
        for ingredient_id, quantity in lines:
            recipe.add_line(ingredient_id, quantity)
        if not recipe.lines:
            raise InvalidArgumentError(ErrorMessages.RECIPE_WITHOUT_LINES, field="lines")
        return recipe

    def rename(self, name: str) -> None:
        self.name = require_text(name, "name", Limits.MAX_NAME_LENGTH)

    def describe(self, description: str | None) -> None:
        """Replace the description; blank clears it."""
        self.description = optional_text(
            description, "description", Limits.MAX_DESCRIPTION_LENGTH
        )

    def add_line(self, ingredient_id: str, quantity: Any) -> RecipeLine:
        """
        Append a line bound to this recipe.

        Raises:
            InvalidArgumentError: Empty ingredient id or quantity not > 0
        """
        line = RecipeLine(
            recipe_id=self.id,
            ingredient_id=require_identifier(ingredient_id, "ingredient_id"),
            quantity=require_positive_decimal(
                quantity,
                "quantity",
                Precision.QUANTITY,
                ErrorMessages.INVALID_QUANTITY,
                maximum=Limits.MAX_QUANTITY,
            ),
        )
        self.lines.append(line)
        return line

    def remove_line(self, line_id: str) -> bool:
        """Remove a line by id. Absent ids are ignored; returns whether one was removed."""
        for index, line in enumerate(self.lines):
            if line.id == line_id:
                del self.lines[index]
                return True
        return False

    def ingredient_ids(self) -> list[str]:
        """Distinct ingredient ids in order of first appearance."""
        return list(dict.fromkeys(line.ingredient_id for line in self.lines))
