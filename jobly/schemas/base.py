"""
Base schemas and common response models.
"""
from typing import Any, Optional, Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Fields are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        from_attributes=True,
        populate_by_name=True,
    )


class DeletedResponse(BaseSchema):
    """Key of a deleted record."""

    deleted: Union[str, int]


class ErrorResponse(BaseSchema):
    """Error response format."""

    error: str
    message: str
    details: Optional[Any] = None
