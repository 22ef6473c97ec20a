import os
import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Suppress verbose PyMongo logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'rentsetu')


class DatabaseUnavailableError(RuntimeError):
    """MongoDB could not be reached at startup."""


def connect(url: str | None = None, database: str | None = None) -> tuple[MongoClient, Database]:
    """Open the process-wide MongoDB client and return it with its database.

    Called once from the application lifespan; the result is handed to every
    repository through dependency injection instead of a module-level cache.

    Raises:
        DatabaseUnavailableError: URL missing or ping failed
    """
    url = url or MONGO_URL
    database = database or DATABASE_NAME

    if not url:
        raise DatabaseUnavailableError("MONGO_URL not configured")

    try:
        client = MongoClient(
            url,
            tz_aware=True,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,  # 5s timeout for initial connection
            socketTimeoutMS=30000,  # 30s timeout for operations
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
    except (ConnectionFailure, PyMongoError) as e:
        error_msg = str(e)[:200]
        logger.error(f"[MONGODB] Initial connection failed: {error_msg}")
        raise DatabaseUnavailableError(error_msg) from e

    logger.info(f"[MONGODB] Connected successfully to {database}")
    return client, client[database]


def ping(client: MongoClient) -> bool:
    """Return True if the server answers a ping."""
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
