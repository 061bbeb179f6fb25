"""
Authentication routes
"""
from fastapi import APIRouter, Depends

from ...application.services import AuthService
from ...dependencies import get_auth_service
from ...schemas import MessageResponse, TokenResponse, UserCredentials


router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=MessageResponse)
async def register(
    user_data: UserCredentials,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user

    - **username**: Unique username
    - **password**: Password, stored only as a bcrypt hash
    """
    await auth_service.register(username=user_data.username, password=user_data.password)
    return MessageResponse(message="User created")


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserCredentials,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login with username and password

    Returns a token to send in the Authorization header. Bad credentials get a 403.
    """
    token = await auth_service.login(username=credentials.username, password=credentials.password)
    return TokenResponse(token=token)
