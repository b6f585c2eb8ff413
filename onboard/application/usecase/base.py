"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError as PydanticValidationError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def describe_validation_error(error: PydanticValidationError) -> str:
    """First validation message of a value object, without pydantic's prefix."""
    message = error.errors()[0]["msg"]
    return message.removeprefix("Value error, ")
