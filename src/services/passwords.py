"""Password hashing with bcrypt."""

import base64
import hashlib

import bcrypt

from src.config import get_settings


def _prehash_password(password: str) -> bytes:
    """Pre-hash with SHA-256 so passwords beyond bcrypt's 72-byte limit still count."""
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(_prehash_password(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    try:
        return bcrypt.checkpw(_prehash_password(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False
