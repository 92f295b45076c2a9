"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fridgepro.schemas.ingredient import IngredientSummary


class ShoppingListCreate(BaseModel):
    """Create a shopping list."""

    name: str = Field(..., min_length=1, max_length=255)


class ShoppingListItemCreate(BaseModel):
    """Add an ingredient to a shopping list."""

    ingredient_id: int
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=50)
    notes: str | None = Field(None, max_length=255)


class ShoppingListItemUpdate(BaseModel):
    """Update a shopping list item."""

    ingredient_id: int | None = None
    quantity: float | None = Field(None, gt=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    notes: str | None = Field(None, max_length=255)
    purchased: bool | None = None


class ShoppingListItemToggle(BaseModel):
    """Mark a shopping list item as purchased or not."""

    purchased: bool


class ShoppingListItemResponse(BaseModel):
    """Shopping list item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    shopping_list_id: int
    ingredient_id: int
    quantity: float
    unit: str
    notes: str | None
    purchased: bool
    ingredient: IngredientSummary


class ShoppingListResponse(BaseModel):
    """Shopping list with its items."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime
    updated_at: datetime
    items: list[ShoppingListItemResponse]


class AddFromRecipeResult(BaseModel):
    """Result of adding a recipe's missing ingredients to a list."""

    added: int
    merged: int
    skipped: int
    shopping_list: ShoppingListResponse
