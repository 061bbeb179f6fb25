import os
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from alligator_service.config import Settings
from alligator_service.dependencies import get_post_repository, get_user_repository
from alligator_service.domain.models import Post, User
from alligator_service.domain.repositories import IPostRepository, IUserRepository
from alligator_service.errors import ValidationError
from alligator_service.main import create_app


class InMemoryUserRepository(IUserRepository):
    """Keeps users in a dict, in insertion order"""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.writes = 0

    async def create(self, username: str, password_hash: str) -> User:
        if any(user.username == username for user in self.users.values()):
            raise ValidationError("Username already exists")
        user = User(id=str(ObjectId()), username=username, password_hash=password_hash)
        self.users[user.id] = user
        self.writes += 1
        return replace(user)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        user = self.users.get(user_id)
        return replace(user, followers=list(user.followers)) if user else None

    async def find_by_ids(self, user_ids: Iterable[str]) -> List[User]:
        wanted = set(user_ids)
        return [replace(user) for user_id, user in self.users.items() if user_id in wanted]

    async def find_by_username(self, username: str) -> Optional[User]:
        for user in self.users.values():
            if user.username == username:
                return replace(user)
        return None

    async def search_by_username(self, query: str) -> List[User]:
        needle = (query or "").lower()
        return [replace(user) for user in self.users.values() if needle in user.username.lower()]

    async def add_follower(self, user_id: str, follower_id: str) -> None:
        self.users[user_id].followers.append(follower_id)
        self.writes += 1


class InMemoryPostRepository(IPostRepository):
    """Keeps posts in a list, in insertion order"""

    def __init__(self):
        self.posts: List[Post] = []

    async def create(
        self,
        user_id: str,
        content: Optional[str],
        image: Optional[str],
        video: Optional[str],
        created_at: datetime
    ) -> Post:
        post = Post(
            id=str(ObjectId()),
            user_id=user_id,
            content=content,
            image=image,
            video=video,
            created_at=created_at,
        )
        self.posts.append(post)
        return replace(post)

    async def find_all(self) -> List[Post]:
        return [replace(post) for post in self.posts]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        PUBLIC_DIR=str(tmp_path / "public"),
        JWT_SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def media_dir(settings):
    return os.path.join(settings.PUBLIC_DIR, settings.MEDIA_DIR)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def post_repo():
    return InMemoryPostRepository()


@pytest.fixture
def app(settings, user_repo, post_repo):
    app = create_app(settings)
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    app.dependency_overrides[get_post_repository] = lambda: post_repo
    return app


@pytest.fixture
def client(app):
    # Used outside a with-block so the MongoDB lifespan never runs
    return TestClient(app)


@pytest.fixture
def register_and_login(client):
    def _register_and_login(username, password="secret123"):
        res = client.post("/register", json={"username": username, "password": password})
        assert res.status_code == 200
        res = client.post("/login", json={"username": username, "password": password})
        assert res.status_code == 200
        return res.json()["token"]
    return _register_and_login
