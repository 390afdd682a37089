"""
Ingredients router.
Ingredient catalog and price ledger.
"""

from fastapi import APIRouter, Depends, status

from costing_api.routers._common import Pagination, get_pagination
from costing_api.routers.deps import get_ingredient_service, get_user_id
from costing_api.routers.schemas import (
    IngredientCreate,
    IngredientListOutput,
    IngredientOutput,
    LatestPriceOutput,
    PriceEntryOutput,
    PriceInput,
    build_ingredient_output,
    build_price_entry_output,
)
from costing_api.services import IngredientService


router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.post("", response_model=IngredientOutput, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    body: IngredientCreate,
    service: IngredientService = Depends(get_ingredient_service),
    user_id: str = Depends(get_user_id),
) -> IngredientOutput:
    """Create an ingredient, optionally with its first prices."""
    ingredient = service.create_ingredient(
        body.name,
        body.supplier,
        [(p.price, p.effective_at) for p in body.prices],
        user_id=user_id,
    )
    return build_ingredient_output(ingredient)


@router.get("", response_model=IngredientListOutput)
def list_ingredients(
    pagination: Pagination = Depends(get_pagination),
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientListOutput:
    items, total = service.list_ingredients(pagination.limit, pagination.offset)
    return IngredientListOutput(
        items=[build_ingredient_output(i) for i in items],
        pagination=pagination.to_dict(total=total),
    )


@router.get("/{ingredient_id}", response_model=IngredientOutput)
def get_ingredient(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientOutput:
    return build_ingredient_output(service.get_ingredient(ingredient_id))


@router.post(
    "/{ingredient_id}/prices",
    response_model=PriceEntryOutput,
    status_code=status.HTTP_201_CREATED,
)
def add_price(
    ingredient_id: str,
    body: PriceInput,
    service: IngredientService = Depends(get_ingredient_service),
    user_id: str = Depends(get_user_id),
) -> PriceEntryOutput:
    """
    Append a price to the ingredient's ledger.

    Cached recipe costs may keep using the previous price for up to the
    cache TTL.
    """
    entry = service.add_price(
        ingredient_id,
        body.price,
        user_id=user_id,
        effective_at=body.effective_at,
    )
    return build_price_entry_output(entry)


@router.get("/{ingredient_id}/latest-price", response_model=LatestPriceOutput)
def get_latest_price(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
) -> LatestPriceOutput:
    """Exact latest price; null when the ingredient has no prices."""
    return LatestPriceOutput(
        ingredient_id=ingredient_id,
        price=service.get_latest_price(ingredient_id),
    )


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
    user_id: str = Depends(get_user_id),
) -> None:
    service.delete_ingredient(ingredient_id, user_id=user_id)


@router.post("/{ingredient_id}/restore", response_model=IngredientOutput)
def restore_ingredient(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
    user_id: str = Depends(get_user_id),
) -> IngredientOutput:
    return build_ingredient_output(service.restore_ingredient(ingredient_id, user_id=user_id))
