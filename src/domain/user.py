"""User Domain Entity

Accounts that sign in and own invoices.
"""

import re
from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String
from src.domain.base import BaseModel, IdType, utc_now

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: Optional[str]) -> bool:
    return bool(EMAIL_PATTERN.match(normalize_email(email)))


class User(BaseModel, table=True):
    """
    User - Account owning invoices

    Domain Rules:
    - email is unique and stored lower-cased
    - Only the password hash is persisted
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique user identifier (auto-increment)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Sign-in email (lower-cased)"
    )

    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Encoded password hash"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Account creation timestamp"
    )
