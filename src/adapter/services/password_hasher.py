"""PBKDF2 Password Hasher Implementation"""

import base64
import hashlib
import hmac
import secrets
from src.app.services.password_hasher import PasswordHasher

ALGORITHM = "pbkdf2_sha256"


class Pbkdf2PasswordHasher(PasswordHasher):
    """
    Hashes passwords with PBKDF2-HMAC-SHA256

    Encoded form: pbkdf2_sha256$<iterations>$<salt>$<hash>
    """

    def __init__(self, iterations: int = 260_000):
        self.iterations = iterations

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(16)
        digest = self._digest(password, salt, self.iterations)
        return f"{ALGORITHM}${self.iterations}${salt}${digest}"

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            algorithm, iterations, salt, expected = password_hash.split("$", 3)
            iterations = int(iterations)
        except ValueError:
            return False
        if algorithm != ALGORITHM:
            return False
        actual = self._digest(password, salt, iterations)
        return hmac.compare_digest(actual, expected)

    @staticmethod
    def _digest(password: str, salt: str, iterations: int) -> str:
        raw = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
        )
        return base64.b64encode(raw).decode("ascii").strip()
