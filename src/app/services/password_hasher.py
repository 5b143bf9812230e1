"""Password Hasher Interface"""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """
    Service interface for password hashing

    Hashes are self-describing strings so the parameters can change
    without invalidating stored passwords.
    """

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass
