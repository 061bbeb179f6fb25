"""
Domain models - Core business entities
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional


@dataclass
class User:
    """User domain model"""
    id: str
    username: str
    password_hash: str
    profile_picture: Optional[str] = None
    followers: List[str] = field(default_factory=list)
    notifications: List[Any] = field(default_factory=list)


@dataclass
class Reply:
    """Reply attached to a post"""
    user: str
    comment: str


@dataclass
class Post:
    """Post domain model"""
    id: str
    user_id: str
    content: Optional[str] = None
    image: Optional[str] = None
    video: Optional[str] = None
    likes: int = 0
    views: int = 0
    replies: List[Reply] = field(default_factory=list)
    created_at: Optional[datetime] = None


@dataclass
class PostWithAuthor:
    """Post with its author resolved for display"""
    post: Post
    author: Optional[User]
