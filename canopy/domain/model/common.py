"""Base model for all domain entities."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Models are frozen. ``model_copy(update=...)`` skips validation, so use
    ``evolve`` to derive a changed copy.
    """

    model_config = ConfigDict(frozen=True)

    def evolve(self, **changes: Any) -> Self:
        """Return a validated copy with ``changes`` applied."""
        return self.model_validate({**self.model_dump(), **changes})
