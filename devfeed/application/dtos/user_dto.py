# devfeed/application/dtos/user_dto.py

"""
Schemas for user data.

Request models validate and normalise their input (emails lowercased,
usernames trimmed) so the auth use cases work on clean values only.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from devfeed.application.dtos.base_dto import CustomBaseModel
from devfeed.shared.utils.email_validation import normalize_email, validate_email
from devfeed.shared.utils.input_validation import InputValidator


def _checked_email(v: str) -> str:
    is_valid, error_msg = validate_email(v)
    if not is_valid:
        raise ValueError(error_msg)
    return normalize_email(v)


def _checked_username(v: str) -> str:
    is_valid, error_msg = InputValidator.validate_username(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v.strip()


def _checked_password(v: str) -> str:
    is_valid, error_msg = InputValidator.validate_password(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


class RegisterRequest(CustomBaseModel):
    """Registration payload."""
    email: str = Field(..., description="User's email, unique.", examples=["user@example.com"])
    username: str = Field(..., description="Display name, 3 to 50 characters, unique.")
    password: str = Field(..., description="Password matching the strength policy.")

    @field_validator("email")
    def validate_email_field(cls, v):
        return _checked_email(v)

    @field_validator("username")
    def validate_username_field(cls, v):
        return _checked_username(v)

    @field_validator("password")
    def validate_password_field(cls, v):
        return _checked_password(v)


class LoginRequest(CustomBaseModel):
    """
    Login payload.

    The password is only required to be present: a policy check here would
    tell a caller something about the stored password.
    """
    email: str = Field(..., description="User's email.")
    password: str = Field(..., description="User's password.")

    @field_validator("email")
    def validate_email_field(cls, v):
        return _checked_email(v)

    @field_validator("password")
    def validate_password_present(cls, v):
        if not v:
            raise ValueError("Password is required")
        return v


class UpdateProfileRequest(CustomBaseModel):
    """
    Profile update payload.

    Every field is optional. An absent or blank field means "unchanged" and is
    not validated.
    """
    username: Optional[str] = Field(None, description="New username.")
    email: Optional[str] = Field(None, description="New email.")
    password: Optional[str] = Field(None, description="New password.")

    @field_validator("email")
    def validate_email_field(cls, v):
        if InputValidator.is_blank(v):
            return None
        return _checked_email(v)

    @field_validator("username")
    def validate_username_field(cls, v):
        if InputValidator.is_blank(v):
            return None
        return _checked_username(v)

    @field_validator("password")
    def validate_password_field(cls, v):
        if InputValidator.is_blank(v):
            return None
        return _checked_password(v)


class AuthResponse(CustomBaseModel):
    """Issued token and the identity it was issued for."""
    token: str = Field(..., description="Signed bearer token.")
    token_type: str = Field("Bearer", serialization_alias="tokenType")
    username: str
    email: str
    expires_in: int = Field(..., serialization_alias="expiresIn", description="Token lifetime in seconds.")


class UserResponse(CustomBaseModel):
    """Public view of a user. Never carries the password hash."""
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class MessageResponse(CustomBaseModel):
    message: str
