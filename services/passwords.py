"""
Password hashing for dealer and admin passwords.

New passwords are stored as werkzeug pbkdf2 hashes. Rows carried over from
the previous system may still hold plaintext; those compare directly until
the password is next changed.
"""
import hmac
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

HASH_PREFIXES = ('pbkdf2:', 'scrypt:')


def hash_password(password: str) -> str:
    return generate_password_hash(password, method='pbkdf2:sha256')


def is_password_hash(stored: Optional[str]) -> bool:
    return bool(stored) and stored.startswith(HASH_PREFIXES) and '$' in stored


def verify_password(stored: Optional[str], candidate: str) -> bool:
    """Check a candidate against a stored hash, or a legacy plaintext value."""
    if not stored or not isinstance(candidate, str):
        return False
    if is_password_hash(stored):
        return check_password_hash(stored, candidate)
    return hmac.compare_digest(stored.encode('utf-8'), candidate.encode('utf-8'))
