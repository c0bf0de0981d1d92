"""FastAPI dependencies for authentication and role gating."""

import logging
from fastapi import Depends, HTTPException, status, Header
from sqlalchemy.orm import Session

from hydrotrack.database.database import get_db
from hydrotrack.database.user_repository import UserRepository
from hydrotrack.auth.jwt import decode_access_token, TokenExpiredError, TokenInvalidError
from hydrotrack.models.user import User, UserRole

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth-token"


def get_current_user(
    x_auth_token: str = Header(default="", alias=AUTH_HEADER),
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user from the session token header.

    Args:
        x_auth_token: Raw token from the `x-auth-token` header
        db: Database session

    Returns:
        User object (password hash never included)

    Raises:
        HTTPException: 401 if the token is absent, expired, invalid, or the user no longer exists
    """
    if not x_auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )

    try:
        claims = decode_access_token(x_auth_token)
    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except TokenInvalidError:
        logger.warning("Rejected request with invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )

    user = UserRepository(db).get(claims.user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


def require_role(user: User, role: UserRole) -> None:
    """Raise 403 unless the user's role is exactly `role`."""
    if user.role != role:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Access denied. {role.value.capitalize()} rights required.",
        )


def get_current_admin(user: User = Depends(get_current_user)) -> User:
    """Authenticated user who must hold the admin role."""
    require_role(user, UserRole.ADMIN)
    return user
