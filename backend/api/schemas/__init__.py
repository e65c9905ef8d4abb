"""
API request and response schemas.
"""

from .auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    WritingStyleSchema,
)

__all__ = [
    "LoginRequest",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
    "WritingStyleSchema",
]
