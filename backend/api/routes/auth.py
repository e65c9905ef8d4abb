"""
Authentication API routes.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.middleware.rate_limit import RATE_LIMITS, limiter
from api.schemas.auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from core.domain.writing_style import DEFAULT_WRITING_STYLE
from core.exceptions import AuthError, ConflictError
from core.security.password import password_hasher
from core.security.tokens import TokenService
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from infrastructure.database.models.base import utcnow
from infrastructure.database.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# Initialize token service
token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Dependency to get the current authenticated user from the Bearer token.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        parts = authorization.split(" ", 1)
        token = parts[1].strip() if len(parts) > 1 else None

    if not token:
        raise AuthError("Not authenticated")

    payload = token_service.verify_access_token(token)
    if not payload:
        raise AuthError("Invalid or expired token")

    result = await db.execute(select(User).where(User.id == payload.sub))
    user = result.scalar_one_or_none()

    if not user:
        raise AuthError("User not found")
    if not user.is_active:
        raise AuthError("Account is deactivated")

    return user


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=token_service.create_access_token(user.id, username=user.username),
        expires_in=token_service.access_token_ttl_seconds,
        user=UserResponse.from_user(user),
    )


async def _ensure_unique(
    db: AsyncSession,
    username: str | None,
    email: str | None,
    exclude_user_id: str | None = None,
) -> None:
    conditions = []
    if username:
        conditions.append(User.username == username)
    if email:
        conditions.append(User.email == email)
    if not conditions:
        return

    query = select(User).where(or_(*conditions))
    if exclude_user_id:
        query = query.where(User.id != exclude_user_id)
    existing = (await db.execute(query)).scalars().first()
    if existing is None:
        return
    if email and existing.email == email:
        raise ConflictError("An account with this email already exists")
    raise ConflictError("This username is already taken")


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["register"])
async def register(
    request: Request,
    register_data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> TokenResponse:
    """
    Register a new user account and sign it in.
    """
    email = register_data.email.lower()
    await _ensure_unique(db, register_data.username, email)

    style = DEFAULT_WRITING_STYLE
    if register_data.writing_style:
        style = register_data.writing_style.to_domain().merged_over(DEFAULT_WRITING_STYLE)

    user = User(
        username=register_data.username,
        email=email,
        password_hash=password_hasher.hash(register_data.password),
        writing_style=style.to_dict(),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise ConflictError("Username or email already exists") from e
    await db.refresh(user)

    logger.info("Registered user %s", user.id, extra={"user_id": user.id})
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> TokenResponse:
    """
    Authenticate user and return an access token.
    """
    result = await db.execute(select(User).where(User.email == login_data.email.lower()))
    user = result.scalar_one_or_none()

    # Always run bcrypt so response time does not reveal whether the email exists
    password_ok = password_hasher.verify(
        login_data.password,
        user.password_hash if user else None,
    )
    if not user or not password_ok:
        raise AuthError("Invalid email or password")

    if not user.is_active:
        raise AuthError("Account is deactivated")

    user.last_login = utcnow()
    user.login_count = (user.login_count or 0) + 1
    await db.commit()
    await db.refresh(user)

    logger.info("User logged in", extra={"user_id": user.id})
    return _token_response(user)


@router.get("/user", response_model=UserResponse)
async def get_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """
    Get current user's profile.
    """
    return UserResponse.from_user(current_user)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    update_data: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """
    Update the current user's profile. Writing style, preferences and blog
    defaults are merged into the stored values.
    """
    email = update_data.email.lower() if update_data.email else None
    username = update_data.username.strip() if update_data.username else None
    await _ensure_unique(db, username, email, exclude_user_id=current_user.id)

    if username:
        current_user.username = username
    if email:
        current_user.email = email
    if update_data.writing_style:
        merged = update_data.writing_style.to_domain().merged_over(current_user.style)
        current_user.writing_style = merged.to_dict()
    if update_data.preferences:
        current_user.preferences = {
            **(current_user.preferences or {}),
            **update_data.preferences.model_dump(exclude_none=True),
        }
    if update_data.blog_defaults:
        current_user.blog_settings = {
            **(current_user.blog_settings or {}),
            **update_data.blog_defaults.model_dump(exclude_none=True),
        }

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Username or email already exists") from e
    await db.refresh(current_user)

    return UserResponse.from_user(current_user)
