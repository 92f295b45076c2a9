"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fridgepro.config import get_settings
from fridgepro.database import get_db
from fridgepro.models.user import User
from fridgepro.services.ai_service import AIService
from fridgepro.services.auth import decode_access_token
from fridgepro.services.fridge_service import FridgeService
from fridgepro.services.openfoodfacts import OpenFoodFactsService, get_openfoodfacts_service
from fridgepro.services.recipe_service import RecipeService

security = HTTPBearer()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    token = credentials.credentials
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.query(User).filter(User.id == int(user_id)).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def resolve_ai_api_key(user: User) -> str | None:
    """The user's own key, or the server-wide one."""
    return user.ai_api_key or get_settings().anthropic_api_key


def get_ai_service(
    current_user: Annotated[User, Depends(get_current_user)],
) -> AIService:
    """Get AI service bound to the current user's key."""
    return AIService(resolve_ai_api_key(current_user))


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_fridge_service(
    db: Annotated[Session, Depends(get_db)],
) -> FridgeService:
    """Get fridge service with dependencies."""
    return FridgeService(db)


def get_off_service() -> OpenFoodFactsService:
    """Get OpenFoodFacts client."""
    return get_openfoodfacts_service()
