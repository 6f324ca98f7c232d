"""Password Hashing — argon2 hashing and constant-time verification.

Invariants:
    - Plain passwords are never stored or logged; only argon2 hashes persist
    - verify_password returns False (never raises) for mismatches and malformed hashes
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
