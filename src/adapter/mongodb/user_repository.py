"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.errors import DuplicateError, PersistenceError
from domain.model.user import User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            password_hash=doc['password_hash'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            otp=doc.get('otp'),
            otp_expires_at=doc.get('otp_expires_at'),
            refresh_token=doc.get('refresh_token'),
            is_verified=doc.get('is_verified', False),
        )

    def create(self, email: str, password_hash: str, otp: str, otp_expires_at: datetime) -> User:
        """Create a new unverified user and return the User object."""
        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'email': email,
            'password_hash': password_hash,
            'otp': otp,
            'otp_expires_at': otp_expires_at,
            'refresh_token': None,
            'is_verified': False,
            'created_at': now,
            'updated_at': now,
        }
        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"email": email})
            raise DuplicateError("User already exists")
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": email, "error": str(e)})
            raise PersistenceError(str(e)) from e

        logger.info("User created", extra={"userId": user_id, "email": email})
        return self._to_domain(user_doc)

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            raise PersistenceError(str(e)) from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError(str(e)) from e
        return self._to_domain(doc) if doc else None

    def consume_otp(self, user_id: str, code: str, now: datetime) -> bool:
        """Clear the OTP and flag the account verified, only if the code is still pending."""
        query = {'_id': user_id, 'otp': code, 'otp_expires_at': {'$gte': now}}
        update = {'$set': {
            'otp': None,
            'otp_expires_at': None,
            'is_verified': True,
            'updated_at': datetime.now(timezone.utc),
        }}
        try:
            result = self.collection.update_one(query, update)
        except PyMongoError as e:
            logger.error("Failed to consume OTP", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError(str(e)) from e
        return result.modified_count > 0

    def set_refresh_token(self, user_id: str, refresh_token: str | None) -> bool:
        """Overwrite the stored refresh token (single active session)."""
        return self._update(user_id, {'refresh_token': refresh_token})

    def _update(self, user_id: str, fields: dict) -> bool:
        fields = {**fields, 'updated_at': datetime.now(timezone.utc)}
        try:
            result = self.collection.update_one({'_id': user_id}, {'$set': fields})
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError(str(e)) from e
        return result.matched_count > 0
