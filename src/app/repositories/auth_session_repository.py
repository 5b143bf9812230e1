"""Auth Session Repository Interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from src.domain.auth_session import AuthSession


class AuthSessionRepository(ABC):

    @abstractmethod
    async def create(self, auth_session: AuthSession) -> AuthSession:
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[AuthSession]:
        pass

    @abstractmethod
    async def delete(self, auth_session: AuthSession) -> None:
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Remove sessions that expired at or before `now`; returns the count"""
        pass
