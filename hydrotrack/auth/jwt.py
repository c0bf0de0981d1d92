"""JWT token generation and validation for hydrotrack.

Tokens are stateless: nothing is persisted server-side, so a token stays valid
until it expires. Callers only use `create_access_token` / `decode_access_token`.
"""

import logging
import os
import jwt
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

_DEV_FALLBACK_SECRET = "change-me-in-production"

# JWT configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or _DEV_FALLBACK_SECRET
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

if JWT_SECRET_KEY == _DEV_FALLBACK_SECRET:
    logger.warning("JWT_SECRET_KEY is not set; signing tokens with the development fallback key")


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Token signature is valid but the token is past its expiry."""


class TokenInvalidError(TokenError):
    """Token is malformed, has a bad signature, or lacks required claims."""


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""
    user_id: int
    role: str


def create_access_token(user_id: int, role: str) -> str:
    """Create a JWT access token for a user.

    Args:
        user_id: User ID to encode in token
        role: User role to encode in token

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "user": {"id": user_id, "role": role},
        "exp": now + timedelta(hours=JWT_EXPIRATION_HOURS),
        "iat": now,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode (must be non-empty)

    Returns:
        TokenClaims with the embedded user id and role

    Raises:
        TokenExpiredError: If the token is past its expiry
        TokenInvalidError: If the signature or structure is invalid
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError("Invalid token") from e

    user = payload.get("user")
    if not isinstance(user, dict):
        raise TokenInvalidError("Invalid token")
    user_id = user.get("id")
    role = user.get("role")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(role, str):
        raise TokenInvalidError("Invalid token")
    return TokenClaims(user_id=user_id, role=role)
