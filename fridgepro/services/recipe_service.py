"""Recipe service: catalog queries, favorites and fridge-based suggestions."""

import logging
import math
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from fridgepro.config import get_settings
from fridgepro.database import LIKE_ESCAPE, contains_pattern
from fridgepro.models.ingredient import Ingredient
from fridgepro.models.recipe import FavoriteRecipe, Recipe, RecipeIngredient
from fridgepro.models.shopping_list import ShoppingList, ShoppingListItem
from fridgepro.schemas.recipe import RecipeCreate
from fridgepro.services.ai_service import GeneratedRecipe
from fridgepro.services.fridge_service import FridgeService, find_or_create_ingredient
from fridgepro.services.suggestions import RecipeSnapshot, Suggestion, suggest_recipes

logger = logging.getLogger(__name__)

# Only recipes from these sources can be deleted, and only by their author
DELETABLE_SOURCES = {"user", "ai_generated"}
DEFAULT_UNIT = "piece"


@dataclass
class SuggestedRecipe:
    """A catalog recipe together with its ranking against the fridge."""

    recipe: Recipe
    suggestion: Suggestion
    inventory: frozenset[int]


@dataclass
class RecipeFilters:
    """Filters for the recipe listing."""

    search: str | None = None
    difficulty: str | None = None
    max_prep_time: int | None = None
    makeable: bool = False
    page: int = 1
    limit: int = 20


def is_makeable(recipe: Recipe, inventory: set[int] | frozenset[int]) -> bool:
    """Whether every ingredient line of the recipe is in the fridge."""
    return all(line.ingredient_id in inventory for line in recipe.ingredients)


def to_snapshot(recipe: Recipe) -> RecipeSnapshot:
    return RecipeSnapshot.of(recipe.id, (line.ingredient_id for line in recipe.ingredients))


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session):
        self.db = db
        self.fridge = FridgeService(db)

    def _recipe_query(self):
        return self.db.query(Recipe).options(
            selectinload(Recipe.ingredients),
            joinedload(Recipe.created_by),
        )

    # --- Reads ---

    def get_inventory_ingredient_ids(self, user_id: int) -> set[int]:
        return self.fridge.get_inventory_ingredient_ids(user_id)

    def get_favorite_recipe_ids(self, user_id: int) -> set[int]:
        rows = (
            self.db.query(FavoriteRecipe.recipe_id)
            .filter(FavoriteRecipe.user_id == user_id)
            .all()
        )
        return {recipe_id for (recipe_id,) in rows}

    def get_catalog(self) -> list[Recipe]:
        """All recipes with their ingredient lines, oldest first."""
        return self._recipe_query().order_by(Recipe.id).all()

    def get_recipe(self, recipe_id: int) -> Recipe:
        recipe = self._recipe_query().filter(Recipe.id == recipe_id).first()
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def get_suggestions(self, user_id: int, limit: int | None = None) -> list[SuggestedRecipe]:
        """Rank the catalog against the user's fridge, favorites first."""
        if limit is None:
            limit = get_settings().suggestion_limit

        inventory = frozenset(self.get_inventory_ingredient_ids(user_id))
        if not inventory:
            return []

        favorite_ids = self.get_favorite_recipe_ids(user_id)
        catalog = self.get_catalog()
        recipes_by_id = {recipe.id: recipe for recipe in catalog}

        ranked = suggest_recipes(
            inventory,
            [to_snapshot(recipe) for recipe in catalog],
            favorite_ids,
            limit=limit,
        )
        return [
            SuggestedRecipe(
                recipe=recipes_by_id[suggestion.recipe.id],
                suggestion=suggestion,
                inventory=inventory,
            )
            for suggestion in ranked
        ]

    def list_recipes(self, user_id: int, filters: RecipeFilters) -> tuple[list[Recipe], int]:
        """One page of recipes matching the filters, newest first.

        Returns:
            The page of recipes and the total number of matches
        """
        query = self.db.query(Recipe)

        if filters.search:
            pattern = contains_pattern(filters.search)
            query = query.filter(
                or_(
                    Recipe.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Recipe.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if filters.difficulty:
            query = query.filter(Recipe.difficulty == filters.difficulty)
        if filters.max_prep_time:
            query = query.filter(Recipe.prep_time <= filters.max_prep_time)

        if filters.makeable:
            inventory = self.get_inventory_ingredient_ids(user_id)
            candidates = query.options(selectinload(Recipe.ingredients)).all()
            makeable_ids = [recipe.id for recipe in candidates if is_makeable(recipe, inventory)]
            query = query.filter(Recipe.id.in_(makeable_ids))

        total = query.count()
        recipes = (
            query.options(selectinload(Recipe.ingredients), joinedload(Recipe.created_by))
            .order_by(Recipe.created_at.desc(), Recipe.id.desc())
            .offset((filters.page - 1) * filters.limit)
            .limit(filters.limit)
            .all()
        )
        return recipes, total

    @staticmethod
    def total_pages(total: int, limit: int) -> int:
        return math.ceil(total / limit) if limit else 0

    # --- Writes ---

    def create_recipe(self, user_id: int, recipe_data: RecipeCreate) -> Recipe:
        """Create a user-authored recipe."""
        ingredient_ids = {line.ingredient_id for line in recipe_data.ingredients}
        found = {
            ingredient_id
            for (ingredient_id,) in self.db.query(Ingredient.id)
            .filter(Ingredient.id.in_(ingredient_ids))
            .all()
        }
        if found != ingredient_ids:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Ingredient not found",
            )

        recipe = Recipe(
            title=recipe_data.title,
            description=recipe_data.description,
            instructions=recipe_data.instructions,
            prep_time=recipe_data.prep_time,
            cook_time=recipe_data.cook_time,
            servings=recipe_data.servings,
            difficulty=recipe_data.difficulty,
            image_url=recipe_data.image_url,
            source="user",
            created_by_id=user_id,
        )
        for line in recipe_data.ingredients:
            recipe.ingredients.append(
                RecipeIngredient(
                    ingredient_id=line.ingredient_id,
                    quantity=line.quantity,
                    unit=line.unit,
                    notes=line.notes,
                )
            )

        self.db.add(recipe)
        self.db.commit()
        return self.get_recipe(recipe.id)

    def create_generated_recipe(self, user_id: int, generated: GeneratedRecipe) -> Recipe:
        """Store an AI-generated recipe.

        Ingredients are matched to the catalog by name (created if unknown);
        lines naming the same ingredient are merged and their quantities summed.
        """
        lines: dict[int, RecipeIngredient] = {}
        for generated_line in generated.ingredients:
            ingredient = find_or_create_ingredient(self.db, generated_line.name)
            quantity = generated_line.quantity or 1
            line = lines.get(ingredient.id)
            if line is None:
                lines[ingredient.id] = RecipeIngredient(
                    ingredient_id=ingredient.id,
                    quantity=quantity,
                    unit=generated_line.unit or DEFAULT_UNIT,
                    notes=generated_line.notes,
                )
            else:
                line.quantity += quantity
                if not line.notes and generated_line.notes:
                    line.notes = generated_line.notes

        recipe = Recipe(
            title=generated.title,
            description=generated.description,
            instructions=generated.instructions,
            prep_time=generated.prep_time if generated.prep_time is not None else 15,
            cook_time=generated.cook_time if generated.cook_time is not None else 0,
            servings=generated.servings or 4,
            difficulty=generated.difficulty,
            image_url=generated.image_url,
            source="ai_generated",
            created_by_id=user_id,
            ingredients=list(lines.values()),
        )
        self.db.add(recipe)
        self.db.commit()
        logger.info(f"Stored generated recipe {recipe.id} for user {user_id}")
        return self.get_recipe(recipe.id)

    def delete_recipe(self, recipe_id: int, user_id: int) -> None:
        """Delete a recipe the user wrote or generated."""
        recipe = self.get_recipe(recipe_id)
        if recipe.created_by_id != user_id or recipe.source not in DELETABLE_SOURCES:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not allowed to delete this recipe",
            )
        self.db.delete(recipe)
        self.db.commit()

    # --- Favorites ---

    def _get_favorite(self, recipe_id: int, user_id: int) -> FavoriteRecipe | None:
        return (
            self.db.query(FavoriteRecipe)
            .filter(FavoriteRecipe.user_id == user_id, FavoriteRecipe.recipe_id == recipe_id)
            .first()
        )

    def add_favorite(self, recipe_id: int, user_id: int) -> FavoriteRecipe:
        self.get_recipe(recipe_id)
        if self._get_favorite(recipe_id, user_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Recipe is already in your favorites",
            )
        favorite = FavoriteRecipe(user_id=user_id, recipe_id=recipe_id)
        self.db.add(favorite)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Recipe is already in your favorites",
            ) from None
        return favorite

    def remove_favorite(self, recipe_id: int, user_id: int) -> None:
        favorite = self._get_favorite(recipe_id, user_id)
        if not favorite:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Recipe is not in your favorites",
            )
        self.db.delete(favorite)
        self.db.commit()

    def list_favorites(self, user_id: int) -> list[FavoriteRecipe]:
        """Favorites, most recently marked first."""
        return (
            self.db.query(FavoriteRecipe)
            .options(
                joinedload(FavoriteRecipe.recipe).selectinload(Recipe.ingredients),
                joinedload(FavoriteRecipe.recipe).joinedload(Recipe.created_by),
            )
            .filter(FavoriteRecipe.user_id == user_id)
            .order_by(FavoriteRecipe.added_at.desc(), FavoriteRecipe.id.desc())
            .all()
        )

    # --- Shopping lists ---

    def add_missing_to_shopping_list(
        self, recipe_id: int, shopping_list: ShoppingList, user_id: int
    ) -> dict:
        """Put the recipe's ingredients that are not in the fridge on a list.

        Ingredients already on the list get the recipe quantity added.

        Returns:
            {"added": int, "merged": int, "skipped": int}
        """
        recipe = self.get_recipe(recipe_id)
        inventory = self.get_inventory_ingredient_ids(user_id)
        items_by_ingredient = {item.ingredient_id: item for item in shopping_list.items}

        result = {"added": 0, "merged": 0, "skipped": 0}
        for line in recipe.ingredients:
            if line.ingredient_id in inventory:
                result["skipped"] += 1
                continue

            existing = items_by_ingredient.get(line.ingredient_id)
            if existing:
                existing.quantity += line.quantity
                existing.unit = line.unit
                result["merged"] += 1
            else:
                item = ShoppingListItem(
                    ingredient_id=line.ingredient_id,
                    quantity=line.quantity,
                    unit=line.unit,
                    notes=line.notes,
                )
                shopping_list.items.append(item)
                items_by_ingredient[line.ingredient_id] = item
                result["added"] += 1

        self.db.commit()
        return result
