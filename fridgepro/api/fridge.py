"""Fridge API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fridgepro.api.dependencies import get_current_user, get_fridge_service
from fridgepro.api.ingredients import get_ingredient_or_404
from fridgepro.database import get_db
from fridgepro.models.fridge import FridgeItem
from fridgepro.models.user import User
from fridgepro.schemas.fridge import FridgeItemCreate, FridgeItemResponse, FridgeItemUpdate
from fridgepro.services.fridge_service import FridgeService

router = APIRouter(prefix="/api/v1/fridge", tags=["fridge"])


def get_user_fridge_item(db: Session, item_id: int, user: User) -> FridgeItem:
    """Get a fridge item that belongs to the user."""
    item = (
        db.query(FridgeItem)
        .filter(FridgeItem.id == item_id, FridgeItem.user_id == user.id)
        .first()
    )
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fridge item not found")
    return item


@router.get("", response_model=list[FridgeItemResponse])
def list_fridge_items(
    current_user: Annotated[User, Depends(get_current_user)],
    fridge: Annotated[FridgeService, Depends(get_fridge_service)],
):
    """List the user's fridge, most recently added first."""
    return fridge.list_items(current_user.id)


@router.post("", response_model=FridgeItemResponse, status_code=status.HTTP_201_CREATED)
def add_fridge_item(
    item_data: FridgeItemCreate,
    response: Response,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    fridge: Annotated[FridgeService, Depends(get_fridge_service)],
):
    """Add an ingredient to the fridge.

    If the ingredient is already there its quantity is increased and the
    existing item is returned with status 200.
    """
    get_ingredient_or_404(db, item_data.ingredient_id)

    try:
        item, created = fridge.add_or_increment(
            current_user.id,
            item_data.ingredient_id,
            item_data.quantity,
            item_data.unit,
            expiry_date=item_data.expiry_date,
            notes=item_data.notes,
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This ingredient is already in your fridge",
        ) from None
    db.refresh(item)

    if not created:
        response.status_code = status.HTTP_200_OK
    return item


@router.put("/{item_id}", response_model=FridgeItemResponse)
def update_fridge_item(
    item_id: int,
    item_data: FridgeItemUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a fridge item."""
    item = get_user_fridge_item(db, item_id, current_user)

    if item_data.ingredient_id is not None and item_data.ingredient_id != item.ingredient_id:
        get_ingredient_or_404(db, item_data.ingredient_id)
        item.ingredient_id = item_data.ingredient_id
    if item_data.quantity is not None:
        item.quantity = item_data.quantity
    if item_data.unit is not None:
        item.unit = item_data.unit
    if "expiry_date" in item_data.model_fields_set:
        item.expiry_date = item_data.expiry_date
    if item_data.notes is not None:
        item.notes = item_data.notes or None

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This ingredient is already in your fridge",
        ) from None
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fridge_item(
    item_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an item from the fridge."""
    item = get_user_fridge_item(db, item_id, current_user)
    db.delete(item)
    db.commit()
