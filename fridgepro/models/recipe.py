"""Recipe, RecipeIngredient and FavoriteRecipe models."""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from fridgepro.database import Base
from fridgepro.models.mixins import TimestampMixin, UserOwnedMixin

RECIPE_SOURCES = ("seed", "user", "ai_generated")
DIFFICULTIES = ("easy", "medium", "hard")


class Recipe(Base, TimestampMixin):
    """Recipe model for storing recipe definitions."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    instructions = Column(JSON, nullable=False, default=list)  # ["step 1", "step 2", ...]
    prep_time = Column(Integer, nullable=True)  # minutes
    cook_time = Column(Integer, nullable=True)  # minutes
    servings = Column(Integer, nullable=False, default=4)
    difficulty = Column(String(10), nullable=False, default="medium")
    image_url = Column(String(500), nullable=True)
    source = Column(String(20), nullable=False, default="user")
    created_by_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    created_by = relationship("User", backref="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.id",
    )
    favorites = relationship(
        "FavoriteRecipe", back_populates="recipe", cascade="all, delete-orphan"
    )


class RecipeIngredient(Base, TimestampMixin):
    """Ingredient line within a recipe."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)
    notes = Column(String(255), nullable=True)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
    ingredient = relationship("Ingredient", lazy="joined")


class FavoriteRecipe(Base, UserOwnedMixin):
    """A recipe marked as favorite by a user."""

    __tablename__ = "favorite_recipes"
    __table_args__ = (UniqueConstraint("user_id", "recipe_id", name="uq_favorite_user_recipe"),)

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(
        Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    recipe = relationship("Recipe", back_populates="favorites")
