# devfeed/adapters/outbound/security/password_hasher.py

import logging
import secrets

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """
    bcrypt password hashing.

    Every hash carries its own random salt, so hashing the same password twice
    yields two different strings. Comparison is done by passlib in constant
    time. Hashes are opaque and must never be logged.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.crypt_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )
        # Verified against when the account does not exist, so a failed login
        # costs the same whether or not the email is known.
        self._dummy_hash = self.crypt_context.hash(secrets.token_urlsafe(16))

    def hash(self, plain_password: str) -> str:
        """Return the bcrypt hash of a plain text password."""
        return self.crypt_context.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Check a plain text password against a stored hash.

        Returns False instead of raising when the stored value is not a
        recognisable bcrypt hash.
        """
        if not plain_password or not hashed_password:
            return False
        try:
            return self.crypt_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            logger.warning("Password verification against a malformed hash")
            return False

    def verify_dummy(self, plain_password: str) -> bool:
        """Spend one verification on the dummy hash. Always returns False."""
        self.verify(plain_password or "x", self._dummy_hash)
        return False
