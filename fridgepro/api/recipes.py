"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from fridgepro.api.dependencies import get_current_user, get_recipe_service
from fridgepro.models.recipe import Recipe
from fridgepro.models.user import User
from fridgepro.schemas.recipe import (
    Difficulty,
    FavoriteRecipeResponse,
    FavoritesResponse,
    Pagination,
    RecipeCreate,
    RecipeIngredientResponse,
    RecipePage,
    RecipeResponse,
    SuggestionResponse,
    SuggestionsResponse,
)
from fridgepro.services.recipe_service import RecipeFilters, RecipeService, SuggestedRecipe

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


def recipe_to_response(
    recipe: Recipe,
    favorite_ids: set[int],
    inventory: set[int] | frozenset[int] | None = None,
) -> RecipeResponse:
    """Serialize a recipe; ingredient availability is filled when an inventory is given."""
    response = RecipeResponse.model_validate(recipe)
    response.is_favorite = recipe.id in favorite_ids
    if inventory is not None:
        response.ingredients = [
            RecipeIngredientResponse.model_validate(line).model_copy(
                update={"available": line.ingredient_id in inventory}
            )
            for line in recipe.ingredients
        ]
    return response


def suggestion_to_response(suggested: SuggestedRecipe) -> SuggestionResponse:
    suggestion = suggested.suggestion
    base = recipe_to_response(suggested.recipe, set(), suggested.inventory)
    return SuggestionResponse(
        **base.model_dump(exclude={"is_favorite"}),
        is_favorite=suggestion.is_favorite,
        compatibility_score=suggestion.compatibility_score,
        missing_ingredients_count=suggestion.missing_ingredients_count,
    )


@router.get("", response_model=RecipePage)
def list_recipes(
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
    search: Annotated[str | None, Query(max_length=100)] = None,
    difficulty: Difficulty | None = None,
    max_prep_time: Annotated[int | None, Query(gt=0)] = None,
    makeable: bool = False,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=50)] = 20,
):
    """List recipes, newest first.

    ``makeable`` keeps only recipes whose every ingredient is in the fridge.
    """
    filters = RecipeFilters(
        search=search,
        difficulty=difficulty,
        max_prep_time=max_prep_time,
        makeable=makeable,
        page=page,
        limit=limit,
    )
    page_items, total = recipes.list_recipes(current_user.id, filters)
    favorite_ids = recipes.get_favorite_recipe_ids(current_user.id)

    return RecipePage(
        recipes=[recipe_to_response(recipe, favorite_ids) for recipe in page_items],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=RecipeService.total_pages(total, limit),
        ),
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
def get_suggestions(
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Recipes ranked by how much of them the fridge covers, favorites first."""
    suggested = recipes.get_suggestions(current_user.id)
    return SuggestionsResponse(suggestions=[suggestion_to_response(s) for s in suggested])


@router.get("/favorites", response_model=FavoritesResponse)
def list_favorites(
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """List favorite recipes, most recently marked first."""
    favorites = recipes.list_favorites(current_user.id)
    return FavoritesResponse(
        favorites=[
            FavoriteRecipeResponse(
                **recipe_to_response(favorite.recipe, set()).model_dump(exclude={"is_favorite"}),
                is_favorite=True,
                favorite_added_at=favorite.added_at,
            )
            for favorite in favorites
        ]
    )


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Get a recipe with ingredient availability against the fridge."""
    recipe = recipes.get_recipe(recipe_id)
    return recipe_to_response(
        recipe,
        recipes.get_favorite_recipe_ids(current_user.id),
        recipes.get_inventory_ingredient_ids(current_user.id),
    )


@router.post("/{recipe_id}/favorite", status_code=status.HTTP_201_CREATED)
def add_favorite(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Mark a recipe as favorite."""
    recipes.add_favorite(recipe_id, current_user.id)
    return {"message": "Recipe added to favorites"}


@router.delete("/{recipe_id}/favorite")
def remove_favorite(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Unmark a favorite recipe."""
    recipes.remove_favorite(recipe_id, current_user.id)
    return {"message": "Recipe removed from favorites"}


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe_data: RecipeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Create a recipe."""
    recipe = recipes.create_recipe(current_user.id, recipe_data)
    return recipe_to_response(recipe, set())


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Delete a recipe you created."""
    recipes.delete_recipe(recipe_id, current_user.id)
