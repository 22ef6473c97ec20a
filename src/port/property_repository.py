"""Port definition for PropertyRepository."""

from typing import Protocol

from domain.model.property import Property


class PropertyRepository(Protocol):
    def save(self, prop: Property) -> Property:
        """Insert a new property. Raise PersistenceError on failure."""
        ...

    def get_by_id(self, property_id: str) -> Property | None: ...

    def find_by_user(self, user_id: str) -> list[Property]:
        """All properties owned by ``user_id``, newest first."""
        ...
