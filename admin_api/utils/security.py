# admin_api/utils/security.py
from passlib.context import CryptContext


class PasswordHasher:
    """One-way password hashing backed by passlib's bcrypt scheme"""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash password using bcrypt"""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        if not hashed_password:
            return False
        return self._context.verify(plain_password, hashed_password)
