from .connection import MongoDB
from .repositories import MongoPostRepository, MongoUserRepository


__all__ = [
    # connection.py
    "MongoDB",
    # repositories.py
    "MongoPostRepository",
    "MongoUserRepository",
]
