"""Ingredient catalog API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fridgepro.api.dependencies import get_current_user, get_off_service
from fridgepro.database import LIKE_ESCAPE, contains_pattern, get_db
from fridgepro.models.fridge import FridgeItem
from fridgepro.models.ingredient import Category, Ingredient
from fridgepro.models.recipe import RecipeIngredient
from fridgepro.models.shopping_list import ShoppingListItem
from fridgepro.models.user import User
from fridgepro.schemas.ingredient import (
    CategoryResponse,
    ExternalIngredient,
    IngredientCreate,
    IngredientResponse,
    IngredientSearchResult,
    IngredientUpdate,
)
from fridgepro.services.fridge_service import find_ingredient_by_name
from fridgepro.services.openfoodfacts import OpenFoodFactsError, OpenFoodFactsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])

LOCAL_SEARCH_LIMIT = 10
SEARCH_LIMIT = 20


def get_ingredient_or_404(db: Session, ingredient_id: int) -> Ingredient:
    ingredient = db.query(Ingredient).filter(Ingredient.id == ingredient_id).first()
    if not ingredient:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


def check_category(db: Session, category_id: int | None) -> None:
    if category_id is None:
        return
    if not db.query(Category).filter(Category.id == category_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category not found",
        )


@router.get("", response_model=list[IngredientResponse])
def list_ingredients(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the whole ingredient catalog by name."""
    return db.query(Ingredient).order_by(Ingredient.name).all()


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List ingredient categories."""
    return db.query(Category).order_by(Category.name).all()


@router.get("/search", response_model=list[IngredientSearchResult])
async def search_ingredients(
    q: Annotated[str, Query(min_length=1, max_length=100)],
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    off: Annotated[OpenFoodFactsService, Depends(get_off_service)],
):
    """Search the local catalog, then complete with OpenFoodFacts products.

    Local matches come first. External candidates whose name is already
    listed are skipped. When OpenFoodFacts is unreachable only local
    matches are returned.
    """
    local = (
        db.query(Ingredient)
        .filter(Ingredient.name.ilike(contains_pattern(q), escape=LIKE_ESCAPE))
        .order_by(Ingredient.name)
        .limit(LOCAL_SEARCH_LIMIT)
        .all()
    )
    results = [
        IngredientSearchResult(
            id=ingredient.id,
            name=ingredient.name,
            category=ingredient.category.name if ingredient.category else None,
            source="local",
            calories=ingredient.calories,
            protein=ingredient.protein,
            carbs=ingredient.carbs,
            fat=ingredient.fat,
            fiber=ingredient.fiber,
        )
        for ingredient in local
    ]

    try:
        external = await off.search_ingredients(q)
    except OpenFoodFactsError:
        logger.warning(f"OpenFoodFacts search failed for '{q}', returning local results only")
        return results

    seen = {result.name.lower() for result in results}
    for candidate in external:
        if len(results) >= SEARCH_LIMIT:
            break
        if candidate.name.lower() in seen:
            continue
        seen.add(candidate.name.lower())
        nutrition = candidate.nutritional_info
        results.append(
            IngredientSearchResult(
                id=None,
                name=candidate.name,
                category=candidate.category,
                source="openfoodfacts",
                source_id=candidate.source_id,
                calories=nutrition.calories if nutrition else None,
                protein=nutrition.proteins if nutrition else None,
                carbs=nutrition.carbohydrates if nutrition else None,
                fat=nutrition.fat if nutrition else None,
                fiber=nutrition.fiber if nutrition else None,
            )
        )
    return results


@router.get("/external/search", response_model=list[ExternalIngredient])
async def search_external_ingredients(
    q: Annotated[str, Query(min_length=1, max_length=100)],
    current_user: Annotated[User, Depends(get_current_user)],
    off: Annotated[OpenFoodFactsService, Depends(get_off_service)],
):
    """Search OpenFoodFacts only."""
    try:
        return await off.search_ingredients(q)
    except OpenFoodFactsError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="OpenFoodFacts is unavailable",
        ) from None


@router.get("/{ingredient_id}", response_model=IngredientResponse)
def get_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific ingredient."""
    return get_ingredient_or_404(db, ingredient_id)


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
def create_ingredient(
    ingredient_data: IngredientCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an ingredient to the catalog."""
    if find_ingredient_by_name(db, ingredient_data.name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An ingredient with this name already exists",
        )
    check_category(db, ingredient_data.category_id)

    ingredient = Ingredient(**ingredient_data.model_dump())
    ingredient.name = ingredient.name.strip()
    db.add(ingredient)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An ingredient with this name already exists",
        ) from None
    db.refresh(ingredient)
    return ingredient


@router.put("/{ingredient_id}", response_model=IngredientResponse)
def update_ingredient(
    ingredient_id: int,
    ingredient_data: IngredientUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update an ingredient."""
    ingredient = get_ingredient_or_404(db, ingredient_id)
    update_data = ingredient_data.model_dump(exclude_unset=True)

    if update_data.get("name"):
        update_data["name"] = update_data["name"].strip()
        other = find_ingredient_by_name(db, update_data["name"])
        if other and other.id != ingredient.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An ingredient with this name already exists",
            )
    elif "name" in update_data:
        del update_data["name"]
    if "category_id" in update_data:
        check_category(db, update_data["category_id"])

    for field, value in update_data.items():
        setattr(ingredient, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An ingredient with this name already exists",
        ) from None
    db.refresh(ingredient)
    return ingredient


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an ingredient nothing refers to."""
    ingredient = get_ingredient_or_404(db, ingredient_id)

    in_fridge = db.query(FridgeItem.id).filter(FridgeItem.ingredient_id == ingredient_id).first()
    in_recipe = (
        db.query(RecipeIngredient.id)
        .filter(RecipeIngredient.ingredient_id == ingredient_id)
        .first()
    )
    on_list = (
        db.query(ShoppingListItem.id)
        .filter(ShoppingListItem.ingredient_id == ingredient_id)
        .first()
    )
    if in_fridge or in_recipe or on_list:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ingredient is still in use",
        )

    db.delete(ingredient)
    db.commit()
