# devfeed/shared/utils/email_validation.py
"""
Email validation and normalisation.
"""

from typing import Tuple

from email_validator import EmailNotValidError, validate_email as check_email_syntax

MAX_EMAIL_LENGTH = 255


def validate_email(email: str) -> Tuple[bool, str]:
    """
    Validate an email address (syntax only, no DNS lookup).

    Args:
        email: Address to validate

    Returns:
        Tuple (valid, error message)
    """
    if not email or not email.strip():
        return False, "Email is required"

    email = normalize_email(email)

    if len(email) > MAX_EMAIL_LENGTH:
        return False, f"Email must not exceed {MAX_EMAIL_LENGTH} characters"

    try:
        check_email_syntax(email, check_deliverability=False)
    except EmailNotValidError:
        return False, "Email must be valid"

    return True, ""


def normalize_email(email: str) -> str:
    """
    Normalise an email by trimming whitespace and lowercasing it.

    Stored emails and token subjects are always in this form.
    """
    return email.strip().lower()
