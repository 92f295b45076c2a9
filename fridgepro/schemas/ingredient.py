"""Ingredient and category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CategoryResponse(BaseModel):
    """Ingredient category response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str | None
    icon: str | None


class IngredientCreate(BaseModel):
    """Create an ingredient."""

    name: str = Field(..., min_length=1, max_length=255)
    category_id: int | None = None
    calories: float | None = Field(None, gt=0)
    protein: float | None = Field(None, gt=0)
    carbs: float | None = Field(None, gt=0)
    fat: float | None = Field(None, gt=0)
    fiber: float | None = Field(None, gt=0)


class IngredientUpdate(BaseModel):
    """Update an ingredient."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category_id: int | None = None
    calories: float | None = Field(None, gt=0)
    protein: float | None = Field(None, gt=0)
    carbs: float | None = Field(None, gt=0)
    fat: float | None = Field(None, gt=0)
    fiber: float | None = Field(None, gt=0)


class IngredientSummary(BaseModel):
    """Ingredient embedded in fridge, recipe and shopping list responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category_id: int | None
    category: CategoryResponse | None


class IngredientResponse(IngredientSummary):
    """Full ingredient response."""

    calories: float | None
    protein: float | None
    carbs: float | None
    fat: float | None
    fiber: float | None
    created_at: datetime
    updated_at: datetime


class NutritionInfo(BaseModel):
    """Per-100g nutrition values from OpenFoodFacts."""

    calories: float = 0
    proteins: float = 0
    carbohydrates: float = 0
    fat: float = 0
    fiber: float = 0
    salt: float = 0
    sugars: float = 0


class ExternalIngredient(BaseModel):
    """Ingredient candidate found on OpenFoodFacts."""

    name: str
    category: str
    nutritional_info: NutritionInfo | None = None
    image: str | None = None
    source: str = "openfoodfacts"
    source_id: str | None = None


class IngredientSearchResult(BaseModel):
    """One entry of the combined local + OpenFoodFacts search.

    Local ingredients carry their integer ``id``; external candidates have
    ``id`` set to None and ``source_id`` set to the product barcode.
    """

    id: int | None
    name: str
    category: str | None
    source: str  # "local" | "openfoodfacts"
    source_id: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    fiber: float | None = None
