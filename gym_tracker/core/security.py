"""Password hashing and session token generation (server-side session auth)."""
import hmac
import secrets

from passlib.hash import pbkdf2_sha256

# Raw salt length stored alongside every user
SALT_SIZE = 16
# Fixed work factor: a stored hash is only reproducible with the rounds it was made with
PASSWORD_HASH_ROUNDS = 29000

_hasher = pbkdf2_sha256.using(rounds=PASSWORD_HASH_ROUNDS)

_DUMMY_SALT = secrets.token_bytes(SALT_SIZE)


def generate_salt() -> bytes:
    return secrets.token_bytes(SALT_SIZE)


def hash_password(password: str, salt: bytes) -> str:
    """Derive the stored hash for `password` using the user's own salt."""
    if not password:
        raise ValueError("Password must not be empty")
    if len(salt) != SALT_SIZE:
        raise ValueError(f"Salt must be {SALT_SIZE} bytes")
    return _hasher.using(salt=bytes(salt)).hash(password)


def verify_password(password: str, salt: bytes | None, expected_hash: str | None) -> bool:
    """Recompute the hash with the stored salt and compare in constant time.

    A missing or malformed salt, or an empty password, is a plain mismatch
    that still costs one full hash, same as an unknown user.
    """
    if not password or not expected_hash or salt is None or len(salt) != SALT_SIZE:
        burn_password_check(password)
        return False
    attempt = hash_password(password, salt)
    return hmac.compare_digest(attempt.encode("utf-8"), expected_hash.encode("utf-8"))


def burn_password_check(password: str) -> None:
    """Spend the same work as a real verification when there is no user to check."""
    hash_password(password or "-", _DUMMY_SALT)


def new_session_token() -> str:
    """Unguessable opaque token for the session cookie."""
    return secrets.token_urlsafe(32)


def fingerprints_match(snapshot: str, current: str | None) -> bool:
    if current is None:
        return False
    return hmac.compare_digest(snapshot.encode("utf-8"), current.encode("utf-8"))
