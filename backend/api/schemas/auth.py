"""
Authentication and profile request/response schemas.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from core.domain.content import (
    MAX_PREFERRED_WORD_COUNT,
    MIN_PREFERRED_WORD_COUNT,
    Niche,
    Tone,
)
from core.domain.writing_style import (
    MAX_CUSTOM_INSTRUCTIONS,
    Complexity,
    Structure,
    Voice,
    WritingStyle,
)


class WritingStyleSchema(BaseModel):
    """Partial writing style; unset fields keep the stored value when merged."""

    voice: Optional[Voice] = None
    complexity: Optional[Complexity] = None
    structure: Optional[Structure] = None
    examples: Optional[bool] = None
    quotes: Optional[bool] = None
    call_to_action: Optional[bool] = None
    custom_instructions: Optional[str] = Field(None, max_length=MAX_CUSTOM_INSTRUCTIONS)

    model_config = ConfigDict(use_enum_values=True)

    def to_domain(self) -> WritingStyle:
        return WritingStyle(**self.model_dump())


class RegisterRequest(BaseModel):
    """Registration request schema."""

    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    writing_style: Optional[WritingStyleSchema] = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        return v


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class PreferencesUpdate(BaseModel):
    default_niche: Optional[Niche] = None
    default_word_count: Optional[int] = Field(
        None, ge=MIN_PREFERRED_WORD_COUNT, le=MAX_PREFERRED_WORD_COUNT
    )
    default_tone: Optional[Tone] = None
    language: Optional[str] = Field(None, max_length=10)
    timezone: Optional[str] = Field(None, max_length=50)

    model_config = ConfigDict(use_enum_values=True)


class BlogDefaultsUpdate(BaseModel):
    default_publish_status: Optional[Literal["draft", "publish"]] = None
    auto_add_images: Optional[bool] = None
    default_image_source: Optional[Literal["unsplash", "pexels", "both"]] = None


class ProfileUpdateRequest(BaseModel):
    """Profile update; nested objects are merged field by field."""

    username: Optional[str] = Field(None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    writing_style: Optional[WritingStyleSchema] = None
    preferences: Optional[PreferencesUpdate] = None
    blog_defaults: Optional[BlogDefaultsUpdate] = None


class BlogSummary(BaseModel):
    """Blog settings as exposed to the client. Credentials are never included."""

    connected: bool
    site_url: Optional[str] = None
    site_name: Optional[str] = None
    default_publish_status: str = "draft"
    auto_add_images: bool = True
    default_image_source: str = "both"


class UserResponse(BaseModel):
    """User response schema."""

    id: str
    username: str
    email: str
    is_active: bool
    writing_style: dict[str, Any]
    preferences: dict[str, Any]
    stats: dict[str, Any]
    blog: BlogSummary
    created_at: datetime
    last_login: Optional[datetime] = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        blog_settings = user.blog_settings or {}
        wordpress = user.wordpress_credentials or {}
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            is_active=user.is_active,
            writing_style=user.writing_style or {},
            preferences=user.preferences or {},
            stats=user.stats or {},
            blog=BlogSummary(
                connected=user.blog_connected,
                site_url=wordpress.get("site_url"),
                site_name=wordpress.get("site_name"),
                default_publish_status=blog_settings.get("default_publish_status", "draft"),
                auto_add_images=blog_settings.get("auto_add_images", True),
                default_image_source=blog_settings.get("default_image_source", "both"),
            ),
            created_at=user.created_at,
            last_login=user.last_login,
        )


class TokenResponse(BaseModel):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until access token expires
    user: UserResponse
