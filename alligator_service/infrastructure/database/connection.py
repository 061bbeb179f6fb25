"""
MongoDB connection and utilities
"""
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from ...config import Settings
from ...errors import StorageError

logger = logging.getLogger(__name__)


class MongoDB:
    """MongoDB connection manager"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None
        self.users_collection: Optional[AsyncIOMotorCollection] = None
        self.posts_collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self):
        """Connect to MongoDB"""
        self.client = AsyncIOMotorClient(
            self.settings.MONGODB_URL,
            serverSelectionTimeoutMS=self.settings.MONGODB_TIMEOUT_MS,
        )
        self.db = self.client[self.settings.MONGODB_DATABASE]
        self.users_collection = self.db[self.settings.MONGODB_USERS_COLLECTION]
        self.posts_collection = self.db[self.settings.MONGODB_POSTS_COLLECTION]

        await self.create_indexes()

        logger.info("Connected to MongoDB, using database %s", self.settings.MONGODB_DATABASE)

    async def disconnect(self):
        """Disconnect from MongoDB"""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("MongoDB connection closed")

    async def create_indexes(self):
        """Create database indexes"""
        try:
            # Usernames are unique; registration also checks before inserting
            await self.users_collection.create_index("username", unique=True)
            await self.posts_collection.create_index("user")
        except PyMongoError as e:
            logger.error(f"Failed to create indexes: {e}")
            raise StorageError("Failed to create indexes") from e

        logger.info("MongoDB indexes created")
