# admin_api/database/mongo_helper.py
"""
MongoDB connection helper with retry logic
"""
import logging
import time
from typing import Optional
from pymongo import MongoClient
from pymongo.errors import ServerSelectionTimeoutError, OperationFailure

logger = logging.getLogger(__name__)

def create_mongo_client(mongo_uri: str, max_retries: int = 3, retry_delay: int = 2,
                        tls: bool = False) -> Optional[MongoClient]:
    """
    Create MongoDB client, pinging the server before handing it out

    Args:
        mongo_uri: MongoDB connection URI
        max_retries: Maximum number of connection attempts
        retry_delay: Initial delay between retries (exponential backoff)
        tls: Enable TLS for the connection

    Returns:
        MongoClient instance or None if connection fails
    """

    connection_params = {
        'serverSelectionTimeoutMS': 30000,  # 30 seconds
        'connectTimeoutMS': 30000,          # 30 seconds
        'socketTimeoutMS': 30000,           # 30 seconds
        'maxPoolSize': 10,                  # Connection pool size
        'retryWrites': True,                # Retry writes on failure
        'tls': tls,
        'appName': 'admin-api'              # Application identifier
    }

    for attempt in range(max_retries):
        try:
            logger.info("MongoDB connection attempt %d/%d", attempt + 1, max_retries)

            client = MongoClient(mongo_uri, **connection_params)
            client.admin.command('ping')

            logger.info("MongoDB connection successful on attempt %d", attempt + 1)
            return client

        except ServerSelectionTimeoutError as e:
            logger.warning("MongoDB server selection timeout (attempt %d): %s", attempt + 1, str(e)[:200])

        except OperationFailure as e:
            logger.error("MongoDB authentication/operation failed (attempt %d): %s", attempt + 1, str(e)[:200])

        except Exception as e:
            logger.error("MongoDB connection failed (attempt %d): %s", attempt + 1, str(e)[:200])

        # Retry logic with exponential backoff
        if attempt < max_retries - 1:
            wait_time = retry_delay * (2 ** attempt)
            logger.info("Retrying in %s seconds...", wait_time)
            time.sleep(wait_time)
        else:
            logger.error("All MongoDB connection attempts failed")

    return None

def test_mongo_connection(client: MongoClient, db_name: str) -> bool:
    """
    Test MongoDB connection and database access

    Returns:
        True if connection and database access successful, False otherwise
    """
    try:
        client.admin.command('ping')
        client[db_name].list_collection_names()

        logger.info("MongoDB connection and database '%s' access verified", db_name)
        return True

    except Exception as e:
        logger.error("MongoDB connection test failed: %s", str(e)[:200])
        return False
