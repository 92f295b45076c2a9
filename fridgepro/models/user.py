"""User model."""

from sqlalchemy import Column, Integer, String

from fridgepro.database import Base
from fridgepro.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    # Personal Anthropic key; falls back to the server key when unset
    ai_api_key = Column(String(255), nullable=True)
