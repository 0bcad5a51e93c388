# devfeed/application/dtos/theme_dto.py

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from devfeed.application.dtos.base_dto import CamelCaseModel
from devfeed.shared.utils.input_validation import InputValidator


class ThemeCreate(CamelCaseModel):
    """Payload to create a theme. Also used to rename or redescribe one."""
    name: str = Field(..., description="Unique theme name.")
    description: Optional[str] = Field(None, description="Short description of the theme.")

    @field_validator("name")
    def validate_name(cls, v):
        is_valid, error_msg = InputValidator.validate_text(v, "Name", InputValidator.MAX_THEME_NAME_LENGTH)
        if not is_valid:
            raise ValueError(error_msg)
        return v.strip()

    @field_validator("description")
    def validate_description(cls, v):
        if InputValidator.is_blank(v):
            return None
        if len(v) > InputValidator.MAX_THEME_DESCRIPTION_LENGTH:
            raise ValueError(
                f"Description must not exceed {InputValidator.MAX_THEME_DESCRIPTION_LENGTH} characters"
            )
        return v.strip()


class ThemeResponse(CamelCaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
