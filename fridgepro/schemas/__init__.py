"""Pydantic schemas for API requests and responses."""

from fridgepro.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from fridgepro.schemas.fridge import FridgeItemCreate, FridgeItemResponse, FridgeItemUpdate
from fridgepro.schemas.ingredient import IngredientCreate, IngredientResponse, IngredientUpdate
from fridgepro.schemas.recipe import RecipeCreate, RecipeResponse, SuggestionResponse
from fridgepro.schemas.shopping_list import (
    ShoppingListCreate,
    ShoppingListItemCreate,
    ShoppingListResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "IngredientCreate",
    "IngredientUpdate",
    "IngredientResponse",
    "FridgeItemCreate",
    "FridgeItemUpdate",
    "FridgeItemResponse",
    "RecipeCreate",
    "RecipeResponse",
    "SuggestionResponse",
    "ShoppingListCreate",
    "ShoppingListItemCreate",
    "ShoppingListResponse",
]
