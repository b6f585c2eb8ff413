"""Base model for all domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable; state changes produce a new instance via
    ``evolve`` and are persisted by the repository.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    def evolve(self, **changes: Any) -> Self:
        """Return a copy with ``changes`` applied."""
        return self.model_copy(update=changes)
