"""Create an admin account, or promote an existing user to admin.

Registration always produces plain users, so the first admin has to be made here:

    python -m hydrotrack.database.create_admin USERNAME EMAIL PASSWORD

Arguments go through the same validation as `POST /auth/register`.
"""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from hydrotrack.api.auth_models import RegisterRequest
from hydrotrack.database.database import SessionLocal, init_db
from hydrotrack.database.user_repository import UserRepository, UserConflictError
from hydrotrack.models.user import Gender, User, UserRole

logger = logging.getLogger(__name__)


class EmailMismatchError(Exception):
    """The username exists but is registered under a different email."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User {username} exists with a different email")


def create_admin(
    db: Session,
    username: str,
    email: str,
    password: str,
    first_name: str = "Admin",
    last_name: str = "Admin",
    gender: Gender = Gender.MALE,
) -> User:
    """Create an admin user, or promote `username` if it already exists.

    Promotion keeps the existing password and profile; `email` must match the account.

    Raises:
        ValidationError: If any argument breaks the registration rules
        EmailMismatchError: If `username` exists under a different email
        UserConflictError: If the email belongs to a different account
    """
    candidate = RegisterRequest(
        username=username,
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        gender=gender,
    )

    repo = UserRepository(db)
    existing = repo.get_by_username(candidate.username)
    if existing:
        if existing.email.lower() != candidate.email.lower():
            raise EmailMismatchError(candidate.username)
        if existing.role == UserRole.ADMIN:
            logger.info(f"User {candidate.username} is already an admin")
            return existing
        logger.info(f"Promoting existing user {candidate.username} to admin")
        return repo.update(existing.id, {"role": UserRole.ADMIN})

    return repo.create(
        username=candidate.username,
        email=candidate.email,
        password=candidate.password,
        first_name=candidate.first_name,
        last_name=candidate.last_name,
        gender=candidate.gender,
        role=UserRole.ADMIN,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote an admin user.")
    parser.add_argument("username", help="Username")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="Admin")
    parser.add_argument("--gender", choices=[g.value for g in Gender], default=Gender.MALE.value)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        user = create_admin(
            db,
            args.username,
            args.email,
            args.password,
            first_name=args.first_name,
            last_name=args.last_name,
            gender=Gender(args.gender),
        )
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(f"Error: {field}: {error['msg']}", file=sys.stderr)
        return 1
    except (UserConflictError, EmailMismatchError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Admin ready: {user.username} (id {user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
