"""
Security utilities for authentication and credential storage.
"""

from .encryption import decrypt_credential, encrypt_credential
from .password import PasswordHasher, password_hasher
from .tokens import TokenPayload, TokenService

__all__ = [
    "PasswordHasher",
    "password_hasher",
    "TokenService",
    "TokenPayload",
    "encrypt_credential",
    "decrypt_credential",
]
