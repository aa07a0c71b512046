"""
Password hashing service.
"""

from passlib.context import CryptContext


class PasswordManager:
    """
    Hashes and verifies passwords with bcrypt.
    """

    def __init__(self):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def hash_password(self, password: str) -> str:
        """Hash a plain password."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Check a plain password against a stored hash."""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False
