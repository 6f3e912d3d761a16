"""Repositories package exports."""

from src.repositories.user_platform_repository import UserPlatformRepository
from src.repositories.user_repository import UserRepository

__all__ = [
    "UserPlatformRepository",
    "UserRepository",
]
