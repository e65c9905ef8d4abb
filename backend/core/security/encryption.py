"""
Encryption of stored third-party credentials (WordPress application passwords).
"""

import base64
import hashlib
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken


@lru_cache(maxsize=4)
def _fernet_for(secret_key: str) -> Fernet:
    # Fernet needs a 32-byte urlsafe-base64 key; derive one from the app secret
    key_bytes = hashlib.sha256(secret_key.encode()).digest()
    return Fernet(base64.urlsafe_b64encode(key_bytes))


def encrypt_credential(value: str, secret_key: str) -> str:
    """
    Encrypt a credential value.

    Args:
        value: Plain text credential
        secret_key: Application secret key

    Returns:
        Encrypted credential string ("" for an empty value)
    """
    if not value:
        return ""
    return _fernet_for(secret_key).encrypt(value.encode()).decode()


def decrypt_credential(encrypted_value: str, secret_key: str) -> str:
    """
    Decrypt a credential value.

    Raises:
        ValueError: If the value was not produced with ``secret_key``
    """
    if not encrypted_value:
        return ""
    try:
        return _fernet_for(secret_key).decrypt(encrypted_value.encode()).decode()
    except InvalidToken as e:
        raise ValueError("Failed to decrypt credential") from e
