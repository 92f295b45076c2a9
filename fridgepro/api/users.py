"""User profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fridgepro.api.dependencies import get_current_user
from fridgepro.database import get_db
from fridgepro.models.user import User
from fridgepro.schemas.auth import ProfileResponse, ProfileUpdate
from fridgepro.services.auth import get_user_by_email, normalize_email

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get the current user's profile."""
    return current_user


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    profile_data: ProfileUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update name, email and personal AI key."""
    email = normalize_email(profile_data.email)
    if email != current_user.email:
        other = get_user_by_email(db, email)
        if other and other.id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already in use",
            )

    current_user.first_name = profile_data.first_name
    current_user.last_name = profile_data.last_name
    current_user.email = email
    current_user.ai_api_key = profile_data.ai_api_key

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already in use",
        ) from None
    db.refresh(current_user)
    return current_user
