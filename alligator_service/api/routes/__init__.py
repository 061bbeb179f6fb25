from .auth import router as auth_router
from .pages import router as pages_router
from .posts import router as posts_router
from .users import router as users_router


__all__ = [
    # auth.py
    "auth_router",
    # pages.py
    "pages_router",
    # posts.py
    "posts_router",
    # users.py
    "users_router",
]
