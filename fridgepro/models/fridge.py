"""Fridge item model for tracking what the user has at home."""

from sqlalchemy import (
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


class FridgeItem(Base, TimestampMixin, UserOwnedMixin):
    """One ingredient currently held by a user, with its quantity."""

    __tablename__ = "fridge_items"
    __table_args__ = (
        UniqueConstraint("user_id", "ingredient_id", name="uq_fridge_user_ingredient"),
    )

    id = Column(Integer, primary_key=True, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)
    expiry_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    added_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", backref="fridge_items")
    ingredient = relationship("Ingredient", lazy="joined")
