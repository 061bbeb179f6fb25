"""
Application services - Business logic layer
"""
import logging
from datetime import datetime, timezone
from typing import Any, BinaryIO, List, Optional

from ..config import Settings
from ..domain.models import Post, PostWithAuthor, User
from ..domain.repositories import IPostRepository, IUserRepository
from ..errors import AuthError, NotFoundError, ValidationError
from ..infrastructure.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from ..infrastructure.storage import MediaStorage

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service - handles registration, login and tokens"""

    def __init__(self, user_repository: IUserRepository, settings: Settings):
        self.user_repo = user_repository
        self.settings = settings

    async def register(self, username: str, password: str) -> User:
        """
        Register a new user

        Raises:
            ValidationError: If the username is already taken
        """
        if await self.user_repo.find_by_username(username):
            raise ValidationError("Username already exists")

        password_hash = hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
        user = await self.user_repo.create(username=username, password_hash=password_hash)
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, username: str, password: str) -> str:
        """
        Login with username and password

        Returns:
            Signed access token

        Raises:
            AuthError: If the user is unknown or the password does not match
        """
        user = await self.user_repo.find_by_username(username)

        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login for username %r", username)
            raise AuthError("Invalid credentials")

        return self.issue_token(user.id)

    def issue_token(self, user_id: str) -> str:
        """Create a token bound to user_id"""
        return create_access_token(
            data={"id": user_id},
            secret_key=self.settings.JWT_SECRET_KEY,
            algorithm=self.settings.JWT_ALGORITHM,
            expires_minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    def verify(self, token: Optional[str]) -> str:
        """
        Verify a token and return the user ID it carries

        The user is not looked up in the store.

        Raises:
            AuthError: If the token is missing, malformed or badly signed
        """
        if not token:
            raise AuthError()

        payload = decode_token(token, self.settings.JWT_SECRET_KEY, self.settings.JWT_ALGORITHM)
        if not payload:
            raise AuthError()

        user_id = payload.get("id")
        if not user_id:
            raise AuthError()

        return str(user_id)


class PostService:
    """Post service - handles the global feed"""

    def __init__(
        self,
        post_repository: IPostRepository,
        user_repository: IUserRepository,
        media_storage: MediaStorage
    ):
        self.post_repo = post_repository
        self.user_repo = user_repository
        self.storage = media_storage

    async def create_post(
        self,
        author_id: str,
        content: Optional[str] = None,
        image_file: Optional[BinaryIO] = None,
        image_filename: Optional[str] = None,
        video: Optional[str] = None
    ) -> Post:
        """
        Create a post, storing the attached image first when there is one

        The author is not checked against the store.
        """
        image_path = None
        if image_file is not None:
            image_path = self.storage.save(image_file, image_filename)

        # A crash between the file write and this insert leaves an orphaned file
        post = await self.post_repo.create(
            user_id=author_id,
            content=content,
            image=image_path,
            video=video,
            created_at=datetime.now(timezone.utc)
        )
        logger.info("User %s created post %s", author_id, post.id)
        return post

    async def list_posts(self) -> List[PostWithAuthor]:
        """Get every post with its author resolved"""
        posts = await self.post_repo.find_all()
        if not posts:
            return []

        authors = await self.user_repo.find_by_ids(post.user_id for post in posts)
        authors_by_id = {author.id: author for author in authors}

        return [PostWithAuthor(post=post, author=authors_by_id.get(post.user_id)) for post in posts]


class UserService:
    """User service - handles follows, search and notifications"""

    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def follow(self, user_id: str, follow_id: str) -> None:
        """
        Append follow_id to the acting user's follower list

        follow_id is not validated; duplicates and self-follows are kept.

        Raises:
            NotFoundError: If the acting user does not exist
        """
        user = await self.user_repo.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        await self.user_repo.add_follower(user.id, follow_id)

    async def search(self, query: Optional[str]) -> List[User]:
        """Case-insensitive substring search on usernames"""
        return await self.user_repo.search_by_username(query or "")

    async def get_notifications(self, user_id: str) -> List[Any]:
        """
        Get the user's notification list as stored

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repo.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user.notifications
