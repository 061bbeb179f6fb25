"""
Repository implementations - Data access layer
"""
import logging
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from ...domain.models import Post, Reply, User
from ...domain.repositories import IPostRepository, IUserRepository
from ...errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


def to_object_id(value: str) -> Union[ObjectId, str]:
    """Use an ObjectId when the value is one, otherwise keep the raw string"""
    if ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def doc_to_user(doc: Optional[Dict[str, Any]]) -> Optional[User]:
    """Convert a MongoDB document to a User model"""
    if not doc:
        return None
    return User(
        id=str(doc["_id"]),
        username=doc.get("username", ""),
        password_hash=doc.get("password", ""),
        profile_picture=doc.get("profilePicture"),
        followers=[str(follower) for follower in doc.get("followers") or []],
        notifications=list(doc.get("notifications") or []),
    )


def doc_to_post(doc: Optional[Dict[str, Any]]) -> Optional[Post]:
    """Convert a MongoDB document to a Post model"""
    if not doc:
        return None
    return Post(
        id=str(doc["_id"]),
        user_id=str(doc["user"]) if doc.get("user") is not None else "",
        content=doc.get("content"),
        image=doc.get("image"),
        video=doc.get("video"),
        likes=doc.get("likes", 0),
        views=doc.get("views", 0),
        replies=[
            Reply(user=str(reply.get("user", "")), comment=reply.get("comment", ""))
            for reply in doc.get("replies") or []
        ],
        created_at=doc.get("createdAt"),
    )


class MongoUserRepository(IUserRepository):
    """User repository implementation using MongoDB"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def create(self, username: str, password_hash: str) -> User:
        """Create a new user"""
        user_doc = {
            "username": username,
            "password": password_hash,
            "profilePicture": None,
            "followers": [],
            "notifications": [],
        }
        try:
            result = await self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            raise ValidationError("Username already exists") from e
        except PyMongoError as e:
            logger.error(f"Failed to create user: {e}")
            raise StorageError("Failed to create user") from e

        user_doc["_id"] = result.inserted_id
        return doc_to_user(user_doc)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        try:
            doc = await self.collection.find_one({"_id": to_object_id(user_id)})
        except PyMongoError as e:
            logger.error(f"Failed to load user: {e}")
            raise StorageError("Failed to load user") from e
        return doc_to_user(doc)

    async def find_by_ids(self, user_ids: Iterable[str]) -> List[User]:
        """Find every user whose ID is in user_ids"""
        ids = [to_object_id(user_id) for user_id in set(user_ids)]
        if not ids:
            return []
        try:
            docs = await self.collection.find({"_id": {"$in": ids}}).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to load users: {e}")
            raise StorageError("Failed to load users") from e
        return [doc_to_user(doc) for doc in docs]

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find user by exact username"""
        try:
            doc = await self.collection.find_one({"username": username})
        except PyMongoError as e:
            logger.error(f"Failed to load user: {e}")
            raise StorageError("Failed to load user") from e
        return doc_to_user(doc)

    async def search_by_username(self, query: str) -> List[User]:
        """Find users whose username contains query, ignoring case"""
        # The query is matched literally, never as a pattern
        pattern = re.escape(query or "")
        try:
            cursor = self.collection.find({"username": {"$regex": pattern, "$options": "i"}})
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to search users: {e}")
            raise StorageError("Failed to search users") from e
        return [doc_to_user(doc) for doc in docs]

    async def add_follower(self, user_id: str, follower_id: str) -> None:
        """Append follower_id to the user's follower list"""
        try:
            await self.collection.update_one(
                {"_id": to_object_id(user_id)},
                {"$push": {"followers": to_object_id(follower_id)}}
            )
        except PyMongoError as e:
            logger.error(f"Failed to update followers: {e}")
            raise StorageError("Failed to update followers") from e


class MongoPostRepository(IPostRepository):
    """Post repository implementation using MongoDB"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def create(
        self,
        user_id: str,
        content: Optional[str],
        image: Optional[str],
        video: Optional[str],
        created_at: datetime
    ) -> Post:
        """Create a new post"""
        post_doc = {
            "user": to_object_id(user_id),
            "content": content,
            "image": image,
            "video": video,
            "likes": 0,
            "views": 0,
            "replies": [],
            "createdAt": created_at,
        }
        try:
            result = await self.collection.insert_one(post_doc)
        except PyMongoError as e:
            logger.error(f"Failed to create post: {e}")
            raise StorageError("Failed to create post") from e

        post_doc["_id"] = result.inserted_id
        return doc_to_post(post_doc)

    async def find_all(self) -> List[Post]:
        """Return every post in insertion order"""
        try:
            docs = await self.collection.find({}).sort("_id", 1).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to load posts: {e}")
            raise StorageError("Failed to load posts") from e
        return [doc_to_post(doc) for doc in docs]
