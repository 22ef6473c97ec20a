"""MongoDB implementation of PropertyRepository."""

from logging import getLogger

from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import PROPERTIES_COLLECTION_NAME
from domain.model.errors import PersistenceError
from domain.model.property import Documents, PersonalDetails, Property, PropertyDetails

logger = getLogger(__name__)


class MongoPropertyRepository:
    def __init__(self, db: Database):
        self.collection = db[PROPERTIES_COLLECTION_NAME]

    # ── indexes ──────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for properties collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('user_id', 1), ('created_at', -1)], 'idx_properties_user_created')
            return True
        except PyMongoError as e:
            logger.error("Failed to create properties indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_document(self, prop: Property) -> dict:
        return {
            '_id': prop.id,
            'user_id': prop.user_id,
            'personal_details': prop.personal_details.to_dict(),
            'property_details': prop.property_details.to_dict(),
            'documents': prop.documents.to_dict(),
            'created_at': prop.created_at,
            'updated_at': prop.updated_at,
        }

    def _to_domain(self, doc: dict) -> Property:
        """Convert MongoDB document to Property domain model."""
        return Property(
            id=doc['_id'],
            user_id=doc['user_id'],
            personal_details=PersonalDetails.from_dict(doc['personal_details']),
            property_details=PropertyDetails.from_dict(doc['property_details']),
            documents=Documents.from_dict(doc.get('documents')),
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
        )

    # ── write operations ─────────────────────────────────────

    def save(self, prop: Property) -> Property:
        try:
            self.collection.insert_one(self._to_document(prop))
        except PyMongoError as e:
            logger.error("Failed to save property", extra={"propertyId": prop.id, "userId": prop.user_id, "error": str(e)})
            raise PersistenceError(str(e)) from e

        logger.info("Property saved", extra={"propertyId": prop.id, "userId": prop.user_id})
        return prop

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, property_id: str) -> Property | None:
        try:
            doc = self.collection.find_one({'_id': property_id})
        except PyMongoError as e:
            logger.error("Failed to get property", extra={"propertyId": property_id, "error": str(e)})
            raise PersistenceError(str(e)) from e
        return self._to_domain(doc) if doc else None

    def find_by_user(self, user_id: str) -> list[Property]:
        try:
            cursor = self.collection.find({'user_id': user_id}).sort('created_at', DESCENDING)
            return [self._to_domain(doc) for doc in cursor]
        except PyMongoError as e:
            logger.error("Failed to list properties", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError(str(e)) from e
