"""SQLAlchemy models."""

from fridgepro.models.fridge import FridgeItem
from fridgepro.models.ingredient import Category, Ingredient
from fridgepro.models.receipt_scan import ReceiptScan
from fridgepro.models.recipe import FavoriteRecipe, Recipe, RecipeIngredient
from fridgepro.models.shopping_list import ShoppingList, ShoppingListItem
from fridgepro.models.user import User

__all__ = [
    "User",
    "Category",
    "Ingredient",
    "FridgeItem",
    "Recipe",
    "RecipeIngredient",
    "FavoriteRecipe",
    "ShoppingList",
    "ShoppingListItem",
    "ReceiptScan",
]
