from datetime import datetime, date
from enum import Enum
from pydantic import BaseModel, ConfigDict, FieldSerializationInfo, field_serializer
from pydantic.alias_generators import to_camel


class CamelCaseBaseModel(BaseModel):
    """
    Base model with camelCase field aliases and automatic serialization.

    This model automatically maps between camelCase (used by the backend API)
    and snake_case (used internally in Python):

    - Input: camelCase keys from the backend are converted to snake_case for validation.
    - Internal: snake_case fields are used throughout the Python codebase.
    - Output: call `model_dump(by_alias=True)` to serialize fields back to camelCase
    for request bodies.
    - Auto-serialization: Enums, dates and nested models are converted to JSON-ready values.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_serializer("*")
    def serialize_any(self, value, info: FieldSerializationInfo):
        """Global serializer for all fields with comprehensive type handling"""

        # Handle nested models with the same aliasing rules
        if isinstance(value, BaseModel):
            return value.model_dump(
                mode=info.mode,
                by_alias=info.by_alias,
                exclude_none=info.exclude_none,
            )

        # Handle Enum objects
        if isinstance(value, Enum):
            return value.value

        # Handle datetime objects (must come before date check)
        if isinstance(value, datetime):
            return value.isoformat()

        # Handle date objects
        if isinstance(value, date):
            return value.isoformat()

        # Handle lists and tuples recursively
        if isinstance(value, (list, tuple)):
            return [self.serialize_any(item, info) for item in value]

        # Handle dictionaries recursively
        if isinstance(value, dict):
            return {key: self.serialize_any(val, info) for key, val in value.items()}

        return value


class CamelCaseRequestModel(CamelCaseBaseModel):
    """Request bodies reject keys the backend contract does not define."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )
