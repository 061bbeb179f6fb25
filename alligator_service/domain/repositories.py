"""
Repository interfaces - Define contracts for data access
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from .models import Post, User


class IUserRepository(ABC):
    """User repository interface"""

    @abstractmethod
    async def create(self, username: str, password_hash: str) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Iterable[str]) -> List[User]:
        """Find every user whose ID is in user_ids"""
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find user by exact username"""
        pass

    @abstractmethod
    async def search_by_username(self, query: str) -> List[User]:
        """Find users whose username contains query, ignoring case"""
        pass

    @abstractmethod
    async def add_follower(self, user_id: str, follower_id: str) -> None:
        """Append follower_id to the user's follower list"""
        pass


class IPostRepository(ABC):
    """Post repository interface"""

    @abstractmethod
    async def create(
        self,
        user_id: str,
        content: Optional[str],
        image: Optional[str],
        video: Optional[str],
        created_at: datetime
    ) -> Post:
        """Create a new post"""
        pass

    @abstractmethod
    async def find_all(self) -> List[Post]:
        """Return every post in insertion order"""
        pass
