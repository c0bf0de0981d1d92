"""Repository for User database operations."""

import logging
from typing import Dict, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hydrotrack.auth.passwords import DUMMY_PASSWORD_HASH, hash_password, verify_password
from hydrotrack.models.constants import DEFAULT_DAILY_WATER_GOAL
from hydrotrack.models.user import User, UserSummary, UserRole
from hydrotrack.database.models import UserDB, enum_to_value

logger = logging.getLogger(__name__)

# Fields a user may change on their own profile
PROFILE_FIELDS = frozenset({"first_name", "last_name", "middle_name", "gender", "daily_water_goal"})
# Fields an admin may change on any user
ADMIN_FIELDS = PROFILE_FIELDS | {"role"}

_ENUM_FIELDS = frozenset({"gender", "role"})


class UserConflictError(Exception):
    """Username or email is already taken."""

    def __init__(self, field: str):
        self.field = field
        if field == "username":
            message = "Username already taken"
        else:
            message = "Email already registered"
        super().__init__(message)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, user_id: int) -> Optional[UserDB]:
        return self.db.query(UserDB).filter(UserDB.id == user_id).first()

    def get(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        user_db = self._get_row(user_id)
        return user_db.to_pydantic() if user_db else None

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        user_db = self.db.query(UserDB).filter(UserDB.username == username).first()
        return user_db.to_pydantic() if user_db else None

    def exists(self, user_id: int) -> bool:
        """Check whether a user ID resolves."""
        return self.db.query(UserDB.id).filter(UserDB.id == user_id).first() is not None

    def list_all(self) -> List[User]:
        """Get all users ordered by ID."""
        users_db = self.db.query(UserDB).order_by(UserDB.id).all()
        return [user_db.to_pydantic() for user_db in users_db]

    def list_summaries(self) -> List[UserSummary]:
        """Get minimal user projections ordered by first then last name."""
        users_db = self.db.query(UserDB).order_by(UserDB.first_name, UserDB.last_name, UserDB.id).all()
        return [user_db.to_summary() for user_db in users_db]

    def create(
        self,
        *,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        gender: str,
        middle_name: Optional[str] = None,
        daily_water_goal: int = DEFAULT_DAILY_WATER_GOAL,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a new user with a hashed password.

        Uniqueness is enforced by the table constraints in a single insert.

        Raises:
            UserConflictError: If the username or email is already taken
        """
        user_db = UserDB(
            username=username,
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            middle_name=middle_name,
            gender=enum_to_value(gender),
            daily_water_goal=daily_water_goal,
            role=enum_to_value(role),
        )
        try:
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
        except IntegrityError as e:
            self.db.rollback()
            field = self._conflicting_field(username, email)
            if field is None:
                logger.error(f"Failed to create user {username}: {type(e).__name__}: {str(e)}")
                raise
            logger.info(f"Rejected registration for {username}: {field} taken")
            raise UserConflictError(field) from e
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user {username}: {type(e).__name__}: {str(e)}")
            raise
        logger.debug(f"Created user {user_db.id}: {user_db.username}")
        return user_db.to_pydantic()

    def _conflicting_field(self, username: str, email: str) -> Optional[str]:
        """Name the unique field that made an insert fail (read after the failed insert)."""
        if self.db.query(UserDB.id).filter(UserDB.username == username).first():
            return "username"
        if self.db.query(UserDB.id).filter(UserDB.email == email).first():
            return "email"
        return None

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user when the username exists and the password matches, else None."""
        user_db = self.db.query(UserDB).filter(UserDB.username == username).first()
        if not user_db:
            verify_password(password, DUMMY_PASSWORD_HASH)
            return None
        if not verify_password(password, user_db.password_hash):
            return None
        return user_db.to_pydantic()

    def update_profile(self, user_id: int, fields: Dict[str, object]) -> Optional[User]:
        """Self-service update; only name, gender and goal fields are applied."""
        return self._apply_update(user_id, fields, PROFILE_FIELDS)

    def update(self, user_id: int, fields: Dict[str, object]) -> Optional[User]:
        """Admin update; profile fields plus role."""
        return self._apply_update(user_id, fields, ADMIN_FIELDS)

    def _apply_update(self, user_id: int, fields: Dict[str, object], allowed: frozenset) -> Optional[User]:
        user_db = self._get_row(user_id)
        if not user_db:
            return None

        for name, value in fields.items():
            if name not in allowed:
                continue
            if name in _ENUM_FIELDS and value is not None:
                value = enum_to_value(value)
            setattr(user_db, name, value)

        try:
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Updated user {user_id}: {sorted(k for k in fields if k in allowed)}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, user_id: int) -> bool:
        """Delete a user and (by cascade) their intake records."""
        user_db = self._get_row(user_id)
        if not user_db:
            return False

        try:
            self.db.delete(user_db)
            self.db.commit()
            logger.debug(f"Deleted user {user_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {type(e).__name__}: {str(e)}")
            raise
