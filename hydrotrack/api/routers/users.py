"""User profile endpoints (self-service and admin)."""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from hydrotrack.api.schemas import ProfileUpdateRequest, AdminUserUpdateRequest, MessageResponse
from hydrotrack.auth.dependencies import get_current_user, get_current_admin
from hydrotrack.database.database import get_db
from hydrotrack.database.user_repository import UserRepository
from hydrotrack.models.constants import MAX_DB_INTEGER
from hydrotrack.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _user_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("/me", response_model=User)
def get_me(current_user: User = Depends(get_current_user)):
    """Current user's profile."""
    return current_user


@router.put("/me", response_model=User)
def update_me(
    body: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update own names, gender and daily goal. Role and identity never change here."""
    fields = {
        "first_name": body.first_name,
        "last_name": body.last_name,
        "middle_name": body.middle_name,
    }
    if body.gender is not None:
        fields["gender"] = body.gender
    if body.daily_water_goal is not None:
        fields["daily_water_goal"] = body.daily_water_goal

    user = UserRepository(db).update_profile(current_user.id, fields)
    if not user:
        raise _user_not_found()
    return user


@router.get("", response_model=List[User])
def list_users(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """All users (admin only)."""
    return UserRepository(db).list_all()


@router.put("/{user_id}", response_model=User)
def update_user(
    body: AdminUserUpdateRequest,
    user_id: int = Path(..., le=MAX_DB_INTEGER),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Update any user's profile and role (admin only)."""
    user = UserRepository(db).update(user_id, body.model_dump())
    if not user:
        raise _user_not_found()
    logger.info(f"Admin {admin.id} updated user {user_id}")
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int = Path(..., le=MAX_DB_INTEGER),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Delete a user and their intake records (admin only)."""
    if not UserRepository(db).delete(user_id):
        raise _user_not_found()
    logger.info(f"Admin {admin.id} deleted user {user_id}")
    return MessageResponse(msg="User deleted")
