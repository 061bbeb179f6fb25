"""
User routes
"""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query

from ...application.services import UserService
from ...dependencies import get_current_user_id, get_user_service
from ...schemas import FollowRequest, MessageResponse, UserResponse, to_plain


router = APIRouter(tags=["Users"])


@router.get("/search", response_model=List[UserResponse])
async def search_users(
    q: Optional[str] = Query(None),
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """
    Search users by username

    - **q**: Case-insensitive substring; empty matches everyone
    """
    users = await user_service.search(q)
    return [UserResponse.from_domain(user) for user in users]


@router.post("/follow", response_model=MessageResponse)
async def follow_user(
    follow_data: FollowRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """
    Follow a user

    - **followId**: ID appended to the current user's follower list
    """
    await user_service.follow(user_id, follow_data.follow_id)
    return MessageResponse(message="User followed")


@router.get("/notifications", response_model=List[Any])
async def get_notifications(
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Get the current user's notifications"""
    notifications = await user_service.get_notifications(user_id)
    return to_plain(notifications)
