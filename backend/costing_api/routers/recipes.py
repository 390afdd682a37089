"""
Recipes router.
Recipe CRUD, line edits and cost breakdown.
"""

from fastapi import APIRouter, Depends, Query, status

from costing_api.routers._common import Pagination, get_pagination
from costing_api.routers.deps import get_recipe_service, get_user_id
from costing_api.routers.schemas import (
    RecipeCostOutput,
    RecipeCreate,
    RecipeLineAdd,
    RecipeListOutput,
    RecipeOutput,
    RecipeUpdate,
    build_recipe_cost_output,
    build_recipe_output,
)
from costing_api.services import RecipeService, UNSET


router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.post("", response_model=RecipeOutput, status_code=status.HTTP_201_CREATED)
def create_recipe(
    body: RecipeCreate,
    service: RecipeService = Depends(get_recipe_service),
    user_id: str = Depends(get_user_id),
) -> RecipeOutput:
    recipe = service.create_recipe(
        body.name,
        body.description,
        [(line.ingredient_id, line.quantity) for line in body.lines],
        user_id=user_id,
    )
    return build_recipe_output(recipe)


@router.get("", response_model=RecipeListOutput)
def list_recipes(
    pagination: Pagination = Depends(get_pagination),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeListOutput:
    items, total = service.list_recipes(pagination.limit, pagination.offset)
    return RecipeListOutput(
        items=[build_recipe_output(r) for r in items],
        pagination=pagination.to_dict(total=total),
    )


@router.get("/{recipe_id}", response_model=RecipeCostOutput)
def get_recipe(
    recipe_id: str,
    bypass_cache: bool = Query(default=False, description="Read prices straight from the store"),
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeCostOutput:
    """
    Recipe with its cost breakdown.

    Prices come from the cache unless bypass_cache is set; cached prices
    may be up to one TTL old.
    """
    recipe, breakdown = service.get_recipe_with_cost(recipe_id, bypass_cache=bypass_cache)
    return build_recipe_cost_output(recipe, breakdown)


@router.patch("/{recipe_id}", response_model=RecipeOutput)
def update_recipe(
    recipe_id: str,
    body: RecipeUpdate,
    service: RecipeService = Depends(get_recipe_service),
    user_id: str = Depends(get_user_id),
) -> RecipeOutput:
    recipe = service.update_recipe(
        recipe_id,
        name=body.name,
        description=body.description if "description" in body.model_fields_set else UNSET,
        expected_version=body.expected_version,
        user_id=user_id,
    )
    return build_recipe_output(recipe)


@router.post("/{recipe_id}/lines", response_model=RecipeOutput, status_code=status.HTTP_201_CREATED)
def add_recipe_line(
    recipe_id: str,
    body: RecipeLineAdd,
    service: RecipeService = Depends(get_recipe_service),
    user_id: str = Depends(get_user_id),
) -> RecipeOutput:
    recipe, _ = service.add_recipe_line(
        recipe_id,
        body.ingredient_id,
        body.quantity,
        expected_version=body.expected_version,
        user_id=user_id,
    )
    return build_recipe_output(recipe)


@router.delete("/{recipe_id}/lines/{line_id}", response_model=RecipeOutput)
def remove_recipe_line(
    recipe_id: str,
    line_id: str,
    expected_version: int | None = Query(default=None),
    service: RecipeService = Depends(get_recipe_service),
    user_id: str = Depends(get_user_id),
) -> RecipeOutput:
    recipe = service.remove_recipe_line(
        recipe_id,
        line_id,
        expected_version=expected_version,
        user_id=user_id,
    )
    return build_recipe_output(recipe)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
    user_id: str = Depends(get_user_id),
) -> None:
    service.delete_recipe(recipe_id, user_id=user_id)


@router.post("/{recipe_id}/restore", response_model=RecipeOutput)
def restore_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
    user_id: str = Depends(get_user_id),
) -> RecipeOutput:
    return build_recipe_output(service.restore_recipe(recipe_id, user_id=user_id))
