"""Auth Session Domain Entity

Bearer-token sessions issued at sign-in, plus the events emitted when
session state changes.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel as PydanticModel
from sqlmodel import Field, Column
from sqlalchemy import ForeignKey, String
from src.domain.base import BaseModel, IdType, as_utc, utc_now


class AuthSession(BaseModel, table=True):
    """
    Auth Session - Issued on sign-in, deleted on sign-out

    Domain Rules:
    - token is unique and opaque
    - A session past expires_at is treated as absent
    - Expired sessions are deleted at sign-in or when presented
    """

    __tablename__ = "auth_sessions"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique session identifier (auto-increment)"
    )

    token: str = Field(
        sa_column=Column(String(128), nullable=False, unique=True, index=True),
        description="Opaque bearer token"
    )

    user_id: int = Field(
        sa_column=Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="Signed-in user"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Sign-in timestamp"
    )

    expires_at: datetime = Field(
        description="Expiry timestamp"
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return as_utc(now or utc_now()) >= as_utc(self.expires_at)


class SessionContext(PydanticModel):
    """Identity of the caller, passed explicitly to use cases that need it"""

    user_id: int
    email: str
    token: Optional[str] = None
    expires_at: Optional[datetime] = None


class AuthEventType(str, Enum):
    SIGNED_UP = "signed_up"
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"


class AuthEvent(PydanticModel):
    """Session state change delivered to subscribers"""

    event_type: AuthEventType
    user_id: int
    email: str
    occurred_at: datetime
