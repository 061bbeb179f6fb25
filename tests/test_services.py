import asyncio
import io

import pytest

from alligator_service.application.services import AuthService, PostService, UserService
from alligator_service.errors import AuthError, NotFoundError, ValidationError
from alligator_service.infrastructure.security import create_access_token
from alligator_service.infrastructure.storage import MediaStorage


@pytest.fixture
def auth_service(user_repo, settings):
    return AuthService(user_repo, settings)


@pytest.fixture
def post_service(post_repo, user_repo, media_dir):
    return PostService(post_repo, user_repo, MediaStorage(media_dir))


@pytest.fixture
def user_service(user_repo):
    return UserService(user_repo)


def test_login_token_verifies_to_user_id(auth_service):
    user = asyncio.run(auth_service.register("alice", "pw"))
    token = asyncio.run(auth_service.login("alice", "pw"))

    assert auth_service.verify(token) == user.id


def test_register_rejects_taken_username(auth_service):
    asyncio.run(auth_service.register("alice", "pw"))

    with pytest.raises(ValidationError):
        asyncio.run(auth_service.register("alice", "pw"))


def test_login_failures_share_one_message(auth_service):
    asyncio.run(auth_service.register("alice", "pw"))

    with pytest.raises(AuthError) as wrong_password:
        asyncio.run(auth_service.login("alice", "nope"))
    with pytest.raises(AuthError) as unknown_user:
        asyncio.run(auth_service.login("nobody", "pw"))

    assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_verify_rejects_bad_tokens(auth_service, token):
    with pytest.raises(AuthError) as exc_info:
        auth_service.verify(token)
    assert exc_info.value.message == ""


def test_verify_rejects_token_without_id(auth_service, settings):
    token = create_access_token({"sub": "alice"}, secret_key=settings.JWT_SECRET_KEY)

    with pytest.raises(AuthError):
        auth_service.verify(token)


def test_tokens_expire_when_configured(user_repo, settings):
    settings.ACCESS_TOKEN_EXPIRE_MINUTES = -1
    service = AuthService(user_repo, settings)

    with pytest.raises(AuthError):
        service.verify(service.issue_token("abc"))


def test_create_post_saves_image_first(post_service, post_repo, media_dir):
    post = asyncio.run(post_service.create_post(
        "author-1",
        content="hi",
        image_file=io.BytesIO(b"img"),
        image_filename="cat.png",
    ))

    assert post.image.endswith("-cat.png")
    assert post_repo.posts[0].image == post.image
    assert post.created_at.tzinfo is not None


def test_list_posts_resolves_known_authors(post_service, user_repo):
    alice = asyncio.run(user_repo.create("alice", "hash"))
    asyncio.run(post_service.create_post(alice.id, content="one"))
    asyncio.run(post_service.create_post("ghost", content="two"))

    listed = asyncio.run(post_service.list_posts())

    assert [item.post.content for item in listed] == ["one", "two"]
    assert listed[0].author.username == "alice"
    assert listed[1].author is None


def test_list_posts_empty(post_service):
    assert asyncio.run(post_service.list_posts()) == []


def test_follow_unknown_acting_user(user_service):
    with pytest.raises(NotFoundError):
        asyncio.run(user_service.follow("missing", "bob"))


def test_search_with_none_matches_everyone(user_service, user_repo):
    asyncio.run(user_repo.create("alice", "hash"))
    asyncio.run(user_repo.create("bob", "hash"))

    assert len(asyncio.run(user_service.search(None))) == 2


def test_notifications_for_unknown_user(user_service):
    with pytest.raises(NotFoundError):
        asyncio.run(user_service.get_notifications("missing"))
