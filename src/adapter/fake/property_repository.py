"""In-memory implementation of PropertyRepository for testing."""

from domain.model.errors import PersistenceError
from domain.model.property import Property


class FakePropertyRepository:
    def __init__(self, fail_on_save: bool = False):
        self.store: dict[str, Property] = {}
        self.fail_on_save = fail_on_save

    def save(self, prop: Property) -> Property:
        if self.fail_on_save:
            raise PersistenceError("insert failed")
        self.store[prop.id] = prop
        return prop

    def get_by_id(self, property_id: str) -> Property | None:
        return self.store.get(property_id)

    def find_by_user(self, user_id: str) -> list[Property]:
        owned = [p for p in self.store.values() if p.user_id == user_id]
        return sorted(owned, key=lambda p: p.created_at, reverse=True)
