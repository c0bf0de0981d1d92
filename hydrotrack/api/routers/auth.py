"""Auth endpoints: register and login."""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hydrotrack.api.auth_models import RegisterRequest, LoginRequest, TokenResponse
from hydrotrack.auth.jwt import create_access_token
from hydrotrack.database.database import get_db
from hydrotrack.database.user_repository import UserRepository, UserConflictError
from hydrotrack.models.user import UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """Create a user account and return a session token."""
    repo = UserRepository(db)
    try:
        user = repo.create(
            username=body.username,
            email=body.email,
            password=body.password,
            first_name=body.first_name,
            last_name=body.last_name,
            middle_name=body.middle_name,
            gender=body.gender,
            daily_water_goal=body.daily_water_goal,
            role=UserRole.USER,
        )
    except UserConflictError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Registered user {user.id}: {user.username}")
    return TokenResponse(token=create_access_token(user.id, user.role))


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return a session token.

    Unknown usernames and wrong passwords produce the same response.
    """
    user = UserRepository(db).authenticate(body.username, body.password)
    if not user:
        logger.info(f"Failed login for {body.username}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

    logger.info(f"User {user.id} logged in")
    return TokenResponse(token=create_access_token(user.id, user.role))
