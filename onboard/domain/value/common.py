"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable, compared by value.

    Used for composite values such as the prospective-user snapshot carried
    by an invitation.
    """

    model_config = ConfigDict(frozen=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Value object wrapping a single primitive (accessed via ``.root``).

    ``model_dump()`` returns the primitive itself, so wrapped values map
    straight onto table columns.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
