"""Fridge service for inventory reads and quantity merging."""

import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from fridgepro.models.fridge import FridgeItem
from fridgepro.models.ingredient import Ingredient
from fridgepro.services.ai_service import FridgeContextItem

logger = logging.getLogger(__name__)


def find_ingredient_by_name(db: Session, name: str) -> Ingredient | None:
    """Case-insensitive exact name lookup."""
    return (
        db.query(Ingredient)
        .filter(func.lower(Ingredient.name) == name.strip().lower())
        .first()
    )


def find_or_create_ingredient(db: Session, name: str) -> Ingredient:
    """Get the catalog ingredient with this name, creating it if needed."""
    name = name.strip()
    ingredient = find_ingredient_by_name(db, name)
    if ingredient is None:
        ingredient = Ingredient(name=name)
        db.add(ingredient)
        db.flush()
        logger.info(f"Created ingredient '{name}'")
    return ingredient


class FridgeService:
    """Service for fridge-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def get_inventory_ingredient_ids(self, user_id: int) -> set[int]:
        """Ingredient ids the user currently holds, quantities ignored."""
        rows = (
            self.db.query(FridgeItem.ingredient_id).filter(FridgeItem.user_id == user_id).all()
        )
        return {ingredient_id for (ingredient_id,) in rows}

    def list_items(self, user_id: int) -> list[FridgeItem]:
        """Fridge items, most recently added first."""
        return (
            self.db.query(FridgeItem)
            .filter(FridgeItem.user_id == user_id)
            .order_by(FridgeItem.added_date.desc(), FridgeItem.id.desc())
            .all()
        )

    def get_context_items(self, user_id: int) -> list[FridgeContextItem]:
        """Fridge contents as described to the AI model."""
        return [
            FridgeContextItem(name=item.ingredient.name, quantity=item.quantity, unit=item.unit)
            for item in self.list_items(user_id)
        ]

    def add_or_increment(
        self,
        user_id: int,
        ingredient_id: int,
        quantity: float,
        unit: str,
        expiry_date: datetime | None = None,
        notes: str | None = None,
    ) -> tuple[FridgeItem, bool]:
        """Add an ingredient, or top up the existing row for it.

        An existing row keeps its expiry date and notes unless new ones are
        given; the unit is always replaced.

        Returns:
            The fridge item and whether it was newly created
        """
        existing = (
            self.db.query(FridgeItem)
            .filter(
                FridgeItem.user_id == user_id,
                FridgeItem.ingredient_id == ingredient_id,
            )
            .first()
        )

        if existing:
            existing.quantity = existing.quantity + quantity
            existing.unit = unit
            if expiry_date is not None:
                existing.expiry_date = expiry_date
            if notes:
                existing.notes = notes
            self.db.flush()
            return existing, False

        item = FridgeItem(
            user_id=user_id,
            ingredient_id=ingredient_id,
            quantity=quantity,
            unit=unit,
            expiry_date=expiry_date,
            notes=notes,
        )
        self.db.add(item)
        self.db.flush()
        return item, True
