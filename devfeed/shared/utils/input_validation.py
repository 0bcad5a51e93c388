# devfeed/shared/utils/input_validation.py

import re
from typing import Optional, Tuple


class InputValidator:
    """
    Validation of user input, complementing the Pydantic field types.

    Every check returns ``(valid, error_message)`` so DTO validators can raise
    the message unchanged.
    """

    # Limits
    MIN_USERNAME_LENGTH = 3
    MAX_USERNAME_LENGTH = 50
    MIN_PASSWORD_LENGTH = 8
    MAX_PASSWORD_LENGTH = 100
    MAX_EMAIL_LENGTH = 255
    MAX_TITLE_LENGTH = 200
    MAX_THEME_NAME_LENGTH = 100
    MAX_THEME_DESCRIPTION_LENGTH = 500
    MAX_COMMENT_LENGTH = 2000

    SPECIAL_CHARACTERS = "@#$%^&+=!?.,:;()[]{}|-_~`"

    PASSWORD_RULE_MESSAGE = (
        "Password must be between 8 and 100 characters and contain at least one lowercase "
        "letter, one uppercase letter, one digit and one special character "
        f"({SPECIAL_CHARACTERS}), without whitespace"
    )

    LOWERCASE = re.compile(r"[a-z]")
    UPPERCASE = re.compile(r"[A-Z]")
    DIGIT = re.compile(r"[0-9]")
    SPECIAL = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")
    WHITESPACE = re.compile(r"\s")

    @classmethod
    def validate_password(cls, password: str) -> Tuple[bool, Optional[str]]:
        """
        Check a password against the strength policy.

        Args:
            password: Password to check

        Returns:
            Tuple (valid, error_message)
        """
        if not password:
            return False, "Password is required"

        if not cls.MIN_PASSWORD_LENGTH <= len(password) <= cls.MAX_PASSWORD_LENGTH:
            return False, cls.PASSWORD_RULE_MESSAGE

        if cls.WHITESPACE.search(password):
            return False, cls.PASSWORD_RULE_MESSAGE

        for pattern in (cls.LOWERCASE, cls.UPPERCASE, cls.DIGIT, cls.SPECIAL):
            if not pattern.search(password):
                return False, cls.PASSWORD_RULE_MESSAGE

        return True, None

    @classmethod
    def validate_username(cls, username: str) -> Tuple[bool, Optional[str]]:
        """Username length is checked after trimming."""
        if not username or not username.strip():
            return False, "Username is required"

        if not cls.MIN_USERNAME_LENGTH <= len(username.strip()) <= cls.MAX_USERNAME_LENGTH:
            return False, (
                f"Username must be between {cls.MIN_USERNAME_LENGTH} and "
                f"{cls.MAX_USERNAME_LENGTH} characters"
            )

        return True, None

    @classmethod
    def validate_text(
            cls, value: str, field: str, max_length: Optional[int] = None
    ) -> Tuple[bool, Optional[str]]:
        """Non-blank text with an optional maximum length."""
        if not value or not value.strip():
            return False, f"{field} is mandatory"

        if max_length is not None and len(value.strip()) > max_length:
            return False, f"{field} must not exceed {max_length} characters"

        return True, None

    @staticmethod
    def is_blank(value: Optional[str]) -> bool:
        return value is None or not value.strip()
