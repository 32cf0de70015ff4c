"""
Base Pydantic schemas.

This module contains base schemas with common configuration and the
response envelope shared by every API endpoint.
"""

from typing import Generic, List, Optional, TypeVar

from fastapi import status
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    All other schemas should inherit from this class.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class Result(BaseSchema, Generic[T]):
    """
    Response envelope.

    Serialized as ``{success, statusCode, message, errors, data}``.
    Services return it for every expected outcome; routers turn
    ``status_code`` into the HTTP status.
    """

    success: bool
    status_code: int = Field(alias="statusCode")
    message: Optional[str] = None
    errors: List[str] = Field(default_factory=list)
    data: Optional[T] = None

    @classmethod
    def success_response(
        cls,
        data: T,
        message: Optional[str] = None,
        status_code: int = status.HTTP_200_OK,
    ) -> "Result[T]":
        """Create a successful result carrying data."""
        return cls(success=True, status_code=status_code, message=message, data=data)

    @classmethod
    def error_response(
        cls,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        errors: Optional[List[str]] = None,
    ) -> "Result[T]":
        """Create an error result."""
        return cls(
            success=False,
            status_code=status_code,
            message=message,
            errors=list(errors or []),
        )

    @classmethod
    def validation_error(cls, errors: List[str], message: str) -> "Result[T]":
        """Create a 400 result listing field-level validation messages."""
        return cls.error_response(message, status.HTTP_400_BAD_REQUEST, errors)

    def to_envelope(self) -> dict:
        """JSON-ready dict using the public field names."""
        return self.model_dump(mode="json", by_alias=True)
