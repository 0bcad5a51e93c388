# devfeed/application/dtos/error_dto.py

from typing import List, Optional

from pydantic import Field

from devfeed.application.dtos.base_dto import CustomBaseModel


class ErrorResponse(CustomBaseModel):
    """Body of every error response."""
    error: str = Field(..., description="Stable error code, e.g. INVALID_TOKEN.")
    message: str
    status: int
    path: str
    timestamp: str = Field(..., description="UTC, formatted YYYY-MM-DD HH:MM:SS.")
    validation_errors: Optional[List[str]] = Field(None, serialization_alias="validationErrors")
