"""Recipe schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fridgepro.schemas.ingredient import IngredientSummary

Difficulty = Literal["easy", "medium", "hard"]

# --- Recipe Ingredient ---


class RecipeIngredientCreate(BaseModel):
    """Ingredient line of a new recipe."""

    ingredient_id: int
    quantity: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1, max_length=50)
    notes: str | None = Field(None, max_length=255)


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    ingredient_id: int
    quantity: float
    unit: str
    notes: str | None
    ingredient: IngredientSummary
    # Only set on suggestions: whether the fridge holds this ingredient
    available: bool | None = None


# --- Recipe ---


class RecipeAuthor(BaseModel):
    """Public name of the user who created a recipe."""

    model_config = ConfigDict(from_attributes=True)

    first_name: str
    last_name: str


class RecipeCreate(BaseModel):
    """Create a new recipe."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    instructions: list[str] = Field(..., min_length=1)
    prep_time: int | None = Field(None, gt=0)
    cook_time: int | None = Field(None, gt=0)
    servings: int = Field(4, gt=0)
    difficulty: Difficulty = "medium"
    image_url: str | None = Field(None, max_length=500)
    ingredients: list[RecipeIngredientCreate] = Field(..., min_length=1)


class RecipeResponse(BaseModel):
    """Recipe response with ingredients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    instructions: list[str]
    prep_time: int | None
    cook_time: int | None
    servings: int
    difficulty: str
    image_url: str | None
    source: str
    created_at: datetime
    created_by_id: int | None
    created_by: RecipeAuthor | None
    ingredients: list[RecipeIngredientResponse]
    is_favorite: bool = False


class SuggestionResponse(RecipeResponse):
    """Recipe annotated with its match against the user's fridge."""

    compatibility_score: int
    missing_ingredients_count: int


class FavoriteRecipeResponse(RecipeResponse):
    """Favorite recipe with the time it was marked."""

    favorite_added_at: datetime


class Pagination(BaseModel):
    """Page metadata for recipe listings."""

    page: int
    limit: int
    total: int
    total_pages: int


class RecipePage(BaseModel):
    """One page of recipes."""

    recipes: list[RecipeResponse]
    pagination: Pagination


class SuggestionsResponse(BaseModel):
    """Ranked suggestions, favorites first."""

    suggestions: list[SuggestionResponse]


class FavoritesResponse(BaseModel):
    """Favorite recipes, most recently marked first."""

    favorites: list[FavoriteRecipeResponse]
