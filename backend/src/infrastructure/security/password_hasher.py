"""
Password Hasher Implementation
bcrypt with a configurable cost factor
"""
import bcrypt

from core.config import settings
from application.services.auth.interfaces import IPasswordHasher

# bcrypt only looks at the first 72 bytes of a password
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt password hasher"""

    def __init__(self, rounds: int = None):
        self.rounds = rounds or settings.BCRYPT_ROUNDS

    def hash_password(self, password: str) -> str:
        hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
        except ValueError:
            # malformed stored hash
            return False
