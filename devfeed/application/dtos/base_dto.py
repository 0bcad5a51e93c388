# devfeed/application/dtos/base_dto.py

"""
Base class for the application's DTOs.

Adds the behaviour shared by every request and response model: reading from
ORM objects, and treating naive datetimes as UTC. SQLite hands timestamps back
without their timezone, PostgreSQL does not.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CustomBaseModel(BaseModel):
    """Base model for every DTO of the application."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("*", mode="after")
    @classmethod
    def assume_utc(cls, value: Any) -> Any:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class CamelCaseModel(CustomBaseModel):
    """
    DTO exchanged with the web client, whose JSON keys are camelCase.

    Fields keep their snake_case names in Python. Requests may use either form.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)
