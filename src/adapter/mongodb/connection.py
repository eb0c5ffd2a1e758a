import os
import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)

# MongoDB connection string from environment
MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'users_api')
USERS_COLLECTION_NAME = 'users'


def create_mongodb_client(url: str | None = None) -> MongoClient | None:
    """Create a MongoDB client and verify it with a ping.

    Called once at application startup; the caller owns the client and
    closes it at shutdown.

    Args:
        url: Connection string, defaults to MONGO_URL

    Returns:
        MongoDB client or None if the connection is not configured or fails
    """
    url = url or MONGO_URL
    if not url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            url,
            serverSelectionTimeoutMS=5000,  # 5s timeout for server selection
            connectTimeoutMS=5000,  # 5s timeout for initial connection
            socketTimeoutMS=30000,  # 30s timeout for operations
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
            compressors=['zlib'],
            zlibCompressionLevel=1,
            tz_aware=True  # created_at comes back as UTC-aware datetimes
        )
        client.admin.command('ping')
        logger.info(f"[MONGODB] Connected successfully to {DATABASE_NAME}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        error_msg = str(e)[:200]
        logger.error(f"[MONGODB] Initial connection failed: {error_msg}")
        return None


def ping(client: MongoClient | None) -> bool:
    """Return True if the client answers a ping."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.debug("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
