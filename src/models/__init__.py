"""Models package exports."""

from src.models.auth import TokenPair, TokenPayload
from src.models.user import User, UserRecord
from src.models.user_platform import OTPResponse, UserPlatform

__all__ = [
    "OTPResponse",
    "TokenPair",
    "TokenPayload",
    "User",
    "UserPlatform",
    "UserRecord",
]
