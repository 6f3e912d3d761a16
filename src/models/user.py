"""User models."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from src.models.base import CamelModel


class User(CamelModel):
    """A registered account, safe to return from the API."""

    id: UUID
    email: str
    username: str
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class UserRecord(User):
    """Stored user row including credential columns. Never serialized to clients."""

    password_hash: str
    refresh_token: Optional[str] = None

    def to_user(self) -> User:
        return User(
            id=self.id,
            email=self.email,
            username=self.username,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
