"""MongoDB index setup, run once from the application lifespan."""

from logging import getLogger

from pymongo.collection import Collection
from pymongo.errors import OperationFailure

logger = getLogger(__name__)


def create_index_safe(collection: Collection, keys: list, name: str, **kwargs) -> None:
    """Create an index, replacing an existing one that has the same name but a different spec."""
    try:
        collection.create_index(keys, name=name, **kwargs)
    except OperationFailure as e:
        # 85 IndexOptionsConflict, 86 IndexKeySpecsConflict
        if e.code not in (85, 86):
            raise
        logger.warning("Replacing conflicting index", extra={"collection": collection.name, "index": name})
        collection.drop_index(name)
        collection.create_index(keys, name=name, **kwargs)


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections."""
    from adapter.mongodb.user_repository import MongoUserRepository
    from adapter.mongodb.property_repository import MongoPropertyRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoPropertyRepository(db).ensure_indexes(),
    ]
    return all(results)
