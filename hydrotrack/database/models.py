"""SQLAlchemy database models for hydrotrack."""

from datetime import datetime
from typing import Union, TypeVar, Type
from sqlalchemy import Column, String, Integer, Date, Time, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from hydrotrack.database.database import Base
from hydrotrack.models.constants import DEFAULT_DAILY_WATER_GOAL
from hydrotrack.models.user import Gender, UserRole

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Credentials (unique constraints enforce identity uniqueness at insert time)
    username = Column(String(30), nullable=False, unique=True)
    email = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=False)

    # Profile
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    middle_name = Column(String(50), nullable=True)
    gender = Column(String, nullable=False)
    daily_water_goal = Column(Integer, nullable=False, default=DEFAULT_DAILY_WATER_GOAL)
    role = Column(String, nullable=False, default=UserRole.USER.value)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    intakes = relationship(
        "WaterIntakeDB",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def to_pydantic(self):
        """Convert database model to Pydantic model (password hash excluded)."""
        from hydrotrack.models.user import User
        return User(
            id=self.id,
            username=self.username,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            middle_name=self.middle_name,
            gender=value_to_enum(self.gender, Gender, Gender.MALE),
            daily_water_goal=self.daily_water_goal,
            role=value_to_enum(self.role, UserRole, UserRole.USER),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_summary(self):
        """Convert to the minimal picker projection."""
        from hydrotrack.models.user import UserSummary
        return UserSummary(
            id=self.id,
            username=self.username,
            first_name=self.first_name,
            last_name=self.last_name,
            middle_name=self.middle_name,
        )


class WaterIntakeDB(Base):
    """Database model for IntakeRecord."""

    __tablename__ = "water_intakes"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_water_intakes_amount_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # User association
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    user = relationship("UserDB", back_populates="intakes")

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from hydrotrack.models.intake import IntakeRecord
        return IntakeRecord(
            id=self.id,
            user_id=self.user_id,
            amount=self.amount,
            date=self.date,
            time=self.time,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
