"""Ingredient catalog and ingredient category models."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fridgepro.database import Base
from fridgepro.models.mixins import TimestampMixin


class Category(Base, TimestampMixin):
    """Grouping for ingredients (vegetables, dairy, ...)."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    color = Column(String(20), nullable=True)  # Hex color like "#22c55e"
    icon = Column(String(20), nullable=True)  # Emoji

    # Relationships
    ingredients = relationship("Ingredient", back_populates="category")


class Ingredient(Base, TimestampMixin):
    """A kind of ingredient, shared by all users.

    Fridge items, recipe lines and shopping list items all reference an
    ingredient by id; recipe suggestions compare ids, never names.
    """

    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)

    # Nutrition per 100g
    calories = Column(Float, nullable=True)
    protein = Column(Float, nullable=True)
    carbs = Column(Float, nullable=True)
    fat = Column(Float, nullable=True)
    fiber = Column(Float, nullable=True)

    # Relationships
    category = relationship("Category", back_populates="ingredients", lazy="joined")
