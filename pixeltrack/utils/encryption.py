"""
Encryption utilities for sensitive data (Meta access tokens).
Uses Fernet (symmetric encryption) from cryptography library.
"""
import logging
import hashlib
import base64
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from pixeltrack.core.config import settings

logger = logging.getLogger(__name__)

# Fixed salt: the key must be reproducible from SECRET_KEY alone
_SALT = b'pixeltrack_token_encryption_salt_v1'

_fernet: Optional[Fernet] = None


def _get_fernet() -> Fernet:
    """
    Build the Fernet instance from SECRET_KEY.
    PBKDF2 is slow on purpose, so the derived key is memoized.
    """
    global _fernet
    if _fernet is None:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=_SALT,
            iterations=100000,
        )
        key = base64.urlsafe_b64encode(kdf.derive(settings.SECRET_KEY.encode()))
        _fernet = Fernet(key)
    return _fernet


def encrypt_token(plaintext: Optional[str]) -> Optional[str]:
    """
    Encrypt a token (e.g., Meta access token).

    Args:
        plaintext: Plain text token

    Returns:
        Encrypted token (base64 encoded), or the input unchanged if empty

    Example:
        encrypted = encrypt_token("EAAB...")
        # Returns: "gAAAAABhK3..."
    """
    if not plaintext:
        return plaintext
    return _get_fernet().encrypt(plaintext.encode()).decode()


def decrypt_token(encrypted: Optional[str]) -> Optional[str]:
    """
    Decrypt a token.

    Raises:
        ValueError: If decryption fails (invalid key or corrupted data)
    """
    if not encrypted:
        return encrypted

    try:
        return _get_fernet().decrypt(encrypted.encode()).decode()
    except InvalidToken as e:
        logger.error("Error decrypting token: invalid key or corrupted data")
        raise ValueError("Failed to decrypt token") from e


def hash_pii(value: Optional[str]) -> Optional[str]:
    """
    SHA-256 of a normalized (lowercased, trimmed) value.
    Meta Conversions API requires user data hashed this way, so
    " Jane@Example.com " and "jane@example.com" hash identically.
    """
    if not value:
        return None
    return hashlib.sha256(value.strip().lower().encode()).hexdigest()
