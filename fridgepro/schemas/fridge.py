"""Fridge schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fridgepro.schemas.ingredient import IngredientSummary


class FridgeItemCreate(BaseModel):
    """Add an ingredient to the fridge."""

    ingredient_id: int
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=50)
    expiry_date: datetime | None = None
    notes: str | None = Field(None, max_length=2000)


class FridgeItemUpdate(BaseModel):
    """Update a fridge item.

    Sending ``expiry_date`` as null or an empty string clears the date;
    leaving it out keeps the current one.
    """

    ingredient_id: int | None = None
    quantity: float | None = Field(None, gt=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    expiry_date: datetime | None = None
    notes: str | None = Field(None, max_length=2000)

    @field_validator("expiry_date", mode="before")
    @classmethod
    def empty_string_clears(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class FridgeItemResponse(BaseModel):
    """Fridge item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    ingredient_id: int
    quantity: float
    unit: str
    expiry_date: datetime | None
    notes: str | None
    added_date: datetime
    ingredient: IngredientSummary
