"""
Business Manager Backend — Password Hashing
===========================================

What:  Hash and verify account passwords with passlib.
How:   The configured scheme (pbkdf2_sha256 by default) hashes new passwords.
       Unsalted hex SHA-256 digests from accounts imported from the previous
       system still verify, and are re-hashed on the next successful login.
"""

from typing import Optional, Tuple

from passlib.context import CryptContext

from bizmanager.config import settings

pwd_context = CryptContext(
    schemes=[settings.password_scheme, "hex_sha256"],
    deprecated="auto",
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> Tuple[bool, Optional[str]]:
    """
    Returns (matches, replacement_hash).

    replacement_hash is set when the stored hash uses a deprecated scheme
    and should be swapped for the returned one.
    """
    try:
        return pwd_context.verify_and_update(plain, hashed)
    except ValueError:
        # Stored value is not a hash any configured scheme recognizes
        return False, None
