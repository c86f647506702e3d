# admin_api/database/db.py
import logging
from pymongo.database import Database
from .mongo_helper import create_mongo_client, test_mongo_connection

logger = logging.getLogger(__name__)

class DatabaseConnection:
    """Owns one MongoClient for the lifetime of the application.

    Built by the app lifespan and closed on shutdown; nothing here is shared
    through module globals, the resulting Database handle is passed on to the
    stores explicitly.
    """

    def __init__(self, settings):
        mongo_uri = settings.MONGODB_URI
        db_name = settings.DATABASE_NAME

        logger.info("Initializing MongoDB connection for Admin API...")
        self.client = create_mongo_client(
            mongo_uri,
            max_retries=settings.MONGODB_CONNECT_RETRIES,
            retry_delay=settings.MONGODB_RETRY_DELAY,
            tls=settings.MONGODB_TLS,
        )

        if self.client is None:
            logger.error("Failed to create MongoDB client after multiple attempts")
            raise ConnectionError("Unable to connect to MongoDB")

        if not test_mongo_connection(self.client, db_name):
            logger.error("Failed to access database '%s'", db_name)
            raise ConnectionError(f"Unable to access database '{db_name}'")

        self._db = self.client[db_name]
        logger.info("MongoDB connection established successfully for database '%s'", db_name)

    def close_connection(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    @property
    def db(self) -> Database:
        return self._db
