"""Password hashing (bcrypt, 12 rounds).

Learn: bcrypt salts each hash itself and only looks at the first 72
bytes of input, so longer passwords are cut there explicitly on both
sides instead of relying on the library's behaviour.
"""

import bcrypt

_ROUNDS = 12
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=_ROUNDS)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """True when the password matches. A malformed stored hash never matches."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
    except (ValueError, TypeError):
        return False
