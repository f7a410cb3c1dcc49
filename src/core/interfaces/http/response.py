"""API response envelope."""

from typing import Generic, TypeVar

from fastapi import status
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Every JSON route answers with this envelope; errors use the exception handlers."""

    code: int = status.HTTP_200_OK
    message: str = "Operation successful"
    data: T | None = None

    @classmethod
    def success(
        cls, data: T = None, message: str = "Operation successful"
    ) -> "ApiResponse[T]":
        return cls(data=data, message=message)

    @classmethod
    def created(cls, data: T, message: str = "Created") -> "ApiResponse[T]":
        return cls(code=status.HTTP_201_CREATED, data=data, message=message)
