"""
Pydantic schemas for request/response validation
"""
from datetime import datetime
from typing import Any, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from .domain.models import PostWithAuthor, Reply, User


def to_plain(value: Any) -> Any:
    """Turn stored BSON values into JSON-ready ones, ObjectIds become hex strings"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {str(key): to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


class UserCredentials(BaseModel):
    """Registration and login request"""
    username: str
    password: str


class TokenResponse(BaseModel):
    """Login response"""
    token: str


class FollowRequest(BaseModel):
    """Follow request"""
    follow_id: str = Field(..., alias="followId")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    """Generic message response"""
    message: str


class UserResponse(BaseModel):
    """User response, never includes the password hash"""
    id: str = Field(alias="_id")
    username: str
    profile_picture: Optional[str] = Field(default=None, alias="profilePicture")
    followers: List[str] = []
    notifications: List[Any] = []

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            profile_picture=user.profile_picture,
            followers=list(user.followers),
            notifications=to_plain(list(user.notifications)),
        )


class ReplyResponse(BaseModel):
    """Reply on a post"""
    user: str
    comment: str

    @classmethod
    def from_domain(cls, reply: Reply) -> "ReplyResponse":
        return cls(user=reply.user, comment=reply.comment)


class PostResponse(BaseModel):
    """Post response with the author expanded"""
    id: str = Field(alias="_id")
    user: Optional[UserResponse] = None
    content: Optional[str] = None
    image: Optional[str] = None
    video: Optional[str] = None
    likes: int = 0
    views: int = 0
    replies: List[ReplyResponse] = []
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, item: PostWithAuthor) -> "PostResponse":
        post = item.post
        return cls(
            id=post.id,
            user=UserResponse.from_domain(item.author) if item.author else None,
            content=post.content,
            image=post.image,
            video=post.video,
            likes=post.likes,
            views=post.views,
            replies=[ReplyResponse.from_domain(reply) for reply in post.replies],
            created_at=post.created_at,
        )


class HealthResponse(BaseModel):
    """Health check response"""
    service: str
    version: str
    status: str
    timestamp: datetime
