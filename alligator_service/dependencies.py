"""
FastAPI dependencies
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from .application.services import AuthService, PostService, UserService
from .config import Settings
from .domain.repositories import IPostRepository, IUserRepository
from .infrastructure.database import MongoPostRepository, MongoUserRepository
from .infrastructure.security import extract_token
from .infrastructure.storage import MediaStorage

# Accepts "Bearer <token>" as well as a bare token
token_header = APIKeyHeader(name="Authorization", auto_error=False)


async def get_settings(request: Request) -> Settings:
    """Get settings from app state"""
    return request.app.state.settings


async def get_user_repository(request: Request) -> IUserRepository:
    """Get user repository dependency"""
    return MongoUserRepository(request.app.state.mongodb.users_collection)


async def get_post_repository(request: Request) -> IPostRepository:
    """Get post repository dependency"""
    return MongoPostRepository(request.app.state.mongodb.posts_collection)


async def get_media_storage(request: Request) -> MediaStorage:
    """Get media storage from app state"""
    return request.app.state.media_storage


async def get_auth_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings)
) -> AuthService:
    """Get auth service dependency"""
    return AuthService(user_repo, settings)


async def get_post_service(
    post_repo: IPostRepository = Depends(get_post_repository),
    user_repo: IUserRepository = Depends(get_user_repository),
    storage: MediaStorage = Depends(get_media_storage)
) -> PostService:
    """Get post service dependency"""
    return PostService(post_repo, user_repo, storage)


async def get_user_service(
    user_repo: IUserRepository = Depends(get_user_repository)
) -> UserService:
    """Get user service dependency"""
    return UserService(user_repo)


async def get_current_user_id(
    authorization: Optional[str] = Depends(token_header),
    auth_service: AuthService = Depends(get_auth_service)
) -> str:
    """
    Get the acting user's ID from the Authorization header

    Raises:
        AuthError: If the token is missing or invalid (answered with 403)
    """
    token = extract_token(authorization)
    return auth_service.verify(token)
