"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from fridgepro.api.dependencies import get_current_user, get_recipe_service
from fridgepro.api.ingredients import get_ingredient_or_404
from fridgepro.database import get_db
from fridgepro.models.shopping_list import ShoppingList, ShoppingListItem
from fridgepro.models.user import User
from fridgepro.schemas.shopping_list import (
    AddFromRecipeResult,
    ShoppingListCreate,
    ShoppingListItemCreate,
    ShoppingListItemResponse,
    ShoppingListItemToggle,
    ShoppingListItemUpdate,
    ShoppingListResponse,
)
from fridgepro.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


def get_user_list(db: Session, list_id: int, user: User) -> ShoppingList:
    """Get a shopping list owned by the user."""
    shopping_list = (
        db.query(ShoppingList)
        .filter(ShoppingList.id == list_id, ShoppingList.user_id == user.id)
        .first()
    )
    if not shopping_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list not found"
        )
    return shopping_list


def get_list_item(db: Session, shopping_list: ShoppingList, item_id: int) -> ShoppingListItem:
    item = (
        db.query(ShoppingListItem)
        .filter(
            ShoppingListItem.id == item_id,
            ShoppingListItem.shopping_list_id == shopping_list.id,
        )
        .first()
    )
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


@router.get("", response_model=list[ShoppingListResponse])
def list_shopping_lists(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """List the user's shopping lists, newest first."""
    return (
        db.query(ShoppingList)
        .filter(ShoppingList.user_id == current_user.id)
        .order_by(ShoppingList.created_at.desc(), ShoppingList.id.desc())
        .all()
    )


@router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
def create_shopping_list(
    list_data: ShoppingListCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a shopping list."""
    shopping_list = ShoppingList(user_id=current_user.id, name=list_data.name.strip())
    db.add(shopping_list)
    db.commit()
    db.refresh(shopping_list)
    return shopping_list


@router.get("/{list_id}", response_model=ShoppingListResponse)
def get_shopping_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a shopping list with its items."""
    return get_user_list(db, list_id, current_user)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_shopping_list(
    list_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a shopping list and its items."""
    shopping_list = get_user_list(db, list_id, current_user)
    db.delete(shopping_list)
    db.commit()


@router.post(
    "/{list_id}/items",
    response_model=ShoppingListItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    list_id: int,
    item_data: ShoppingListItemCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Add an ingredient to a list.

    An ingredient already on the list gets the new quantity added to it.
    """
    shopping_list = get_user_list(db, list_id, current_user)
    get_ingredient_or_404(db, item_data.ingredient_id)

    existing = next(
        (item for item in shopping_list.items if item.ingredient_id == item_data.ingredient_id),
        None,
    )
    if existing:
        existing.quantity += item_data.quantity
        existing.unit = item_data.unit
        if item_data.notes:
            existing.notes = item_data.notes
        existing.purchased = False
        item = existing
    else:
        item = ShoppingListItem(
            shopping_list_id=shopping_list.id,
            ingredient_id=item_data.ingredient_id,
            quantity=item_data.quantity,
            unit=item_data.unit,
            notes=item_data.notes,
        )
        db.add(item)

    db.commit()
    db.refresh(item)
    return item


@router.put("/{list_id}/items/{item_id}", response_model=ShoppingListItemResponse)
def update_item(
    list_id: int,
    item_id: int,
    item_data: ShoppingListItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a list item."""
    shopping_list = get_user_list(db, list_id, current_user)
    item = get_list_item(db, shopping_list, item_id)

    update_data = item_data.model_dump(exclude_unset=True)
    if update_data.get("ingredient_id") is not None:
        get_ingredient_or_404(db, update_data["ingredient_id"])
    for field, value in update_data.items():
        if value is None and field != "notes":
            continue
        setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return item


@router.patch("/{list_id}/items/{item_id}", response_model=ShoppingListItemResponse)
def toggle_item(
    list_id: int,
    item_id: int,
    toggle: ShoppingListItemToggle,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Mark an item as purchased or not."""
    shopping_list = get_user_list(db, list_id, current_user)
    item = get_list_item(db, shopping_list, item_id)
    item.purchased = toggle.purchased
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{list_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    list_id: int,
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an item from a list."""
    shopping_list = get_user_list(db, list_id, current_user)
    item = get_list_item(db, shopping_list, item_id)
    db.delete(item)
    db.commit()


@router.post("/{list_id}/from-recipe/{recipe_id}", response_model=AddFromRecipeResult)
def add_from_recipe(
    list_id: int,
    recipe_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    recipes: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Add the recipe ingredients that are not in the fridge to the list."""
    shopping_list = get_user_list(db, list_id, current_user)
    counts = recipes.add_missing_to_shopping_list(recipe_id, shopping_list, current_user.id)
    db.refresh(shopping_list)
    return AddFromRecipeResult(
        **counts,
        shopping_list=ShoppingListResponse.model_validate(shopping_list),
    )
