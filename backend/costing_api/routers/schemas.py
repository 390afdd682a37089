"""
Pydantic request/response schemas for the costing API.

Money is rounded to cents here and nowhere else.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from costing_api.domain import CostBreakdown, Ingredient, PriceEntry, Recipe, RecipeLine, round_money


# =============================================================================
# Requests
# =============================================================================


class PriceInput(BaseModel):
    price: Decimal
    effective_at: datetime | None = None


class IngredientCreate(BaseModel):
    name: str
    supplier: str
    prices: list[PriceInput] = Field(default_factory=list)


class RecipeLineInput(BaseModel):
    ingredient_id: str
    quantity: Decimal


class RecipeCreate(BaseModel):
    name: str
    description: str | None = None
    lines: list[RecipeLineInput]


class RecipeUpdate(BaseModel):
    """Fields left out are kept; an explicit null description clears it."""

    name: str | None = None
    description: str | None = None
    expected_version: int | None = None


class RecipeLineAdd(RecipeLineInput):
    expected_version: int | None = None


# =============================================================================
# Responses
# =============================================================================


class AuditOutput(BaseModel):
    id: str
    version: int
    created_at: datetime
    created_by: str | None = None
    last_modified_at: datetime
    last_modified_by: str | None = None


class PriceEntryOutput(BaseModel):
    id: str
    ingredient_id: str
    price: Decimal
    effective_at: datetime


class IngredientOutput(AuditOutput):
    name: str
    supplier: str
    latest_price: Decimal | None = None
    price_entries: list[PriceEntryOutput] = Field(default_factory=list)


class LatestPriceOutput(BaseModel):
    ingredient_id: str
    price: Decimal | None = None


class RecipeLineOutput(BaseModel):
    id: str
    ingredient_id: str
    quantity: Decimal


class RecipeOutput(AuditOutput):
    name: str
    description: str | None = None
    lines: list[RecipeLineOutput] = Field(default_factory=list)


class CostLineOutput(BaseModel):
    line_id: str
    ingredient_id: str
    ingredient_name: str
    quantity: Decimal
    unit_price: Decimal
    line_cost: Decimal


class CostBreakdownOutput(BaseModel):
    lines: list[CostLineOutput]
    total: Decimal


class RecipeCostOutput(RecipeOutput):
    cost: CostBreakdownOutput


class PaginatedOutput(BaseModel):
    items: list[Any]
    pagination: dict[str, Any]


class IngredientListOutput(PaginatedOutput):
    items: list[IngredientOutput]


class RecipeListOutput(PaginatedOutput):
    items: list[RecipeOutput]


# =============================================================================
# Builders
# =============================================================================


def build_price_entry_output(entry: PriceEntry) -> PriceEntryOutput:
    return PriceEntryOutput(
        id=entry.id,
        ingredient_id=entry.ingredient_id,
        price=entry.price,
        effective_at=entry.effective_at,
    )


def build_ingredient_output(ingredient: Ingredient) -> IngredientOutput:
    latest = ingredient.latest_price()
    return IngredientOutput(
        id=ingredient.id,
        version=ingredient.version,
        created_at=ingredient.created_at,
        created_by=ingredient.created_by,
        last_modified_at=ingredient.last_modified_at,
        last_modified_by=ingredient.last_modified_by,
        name=ingredient.name,
        supplier=ingredient.supplier,
        latest_price=latest.price if latest else None,
        price_entries=[build_price_entry_output(e) for e in ingredient.price_entries],
    )


def _build_line_output(line: RecipeLine) -> RecipeLineOutput:
    return RecipeLineOutput(id=line.id, ingredient_id=line.ingredient_id, quantity=line.quantity)


def build_recipe_output(recipe: Recipe) -> RecipeOutput:
    return RecipeOutput(
        id=recipe.id,
        version=recipe.version,
        created_at=recipe.created_at,
        created_by=recipe.created_by,
        last_modified_at=recipe.last_modified_at,
        last_modified_by=recipe.last_modified_by,
        name=recipe.name,
        description=recipe.description,
        lines=[_build_line_output(line) for line in recipe.lines],
    )


def build_recipe_cost_output(recipe: Recipe, breakdown: CostBreakdown) -> RecipeCostOutput:
    cost = CostBreakdownOutput(
        lines=[
            CostLineOutput(
                line_id=line.line_id,
                ingredient_id=line.ingredient_id,
                ingredient_name=line.ingredient_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_cost=round_money(line.line_cost),
            )
            for line in breakdown.lines
        ],
        total=round_money(breakdown.total),
    )
    return RecipeCostOutput(**build_recipe_output(recipe).model_dump(), cost=cost)
