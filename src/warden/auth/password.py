"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt generates a random
salt per hash and embeds it, together with the work factor, in the output
("$2b$12$<salt><digest>"), so verification needs nothing but the stored
string. The work factor comes from settings (12 ≈ 100-250ms per hash).

bcrypt only sees the first 72 bytes of its input, so longer passwords are
refused here instead of being cut: a cut password would match any other
password sharing its first 72 bytes.

A wrong password is an ordinary outcome (False). A stored hash that bcrypt
can't even parse is not: that's corrupt data, raised as an integrity fault.

Both calls are CPU-bound for the whole work factor. Async callers run them
in a worker thread (see services/auth_service.py).
"""

from typing import Optional

import bcrypt

from warden.config import settings
from warden.errors import CredentialIntegrityError, PasswordTooLongError

MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    """True if bcrypt will see every byte of the password."""
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Learn: Never falls back to a cheaper scheme. If bcrypt rejects the
    configured work factor, that's a deployment error and surfaces as
    CredentialIntegrityError.
    """
    if not password_fits(password):
        raise PasswordTooLongError()
    try:
        salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
    except ValueError as e:
        raise CredentialIntegrityError(f"Password hashing failed: {e}") from e


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash (constant-time compare)."""
    if not password_hash or not password_hash.startswith("$2"):
        raise CredentialIntegrityError()
    # Nothing over the limit was ever hashed.
    if not password_fits(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError as e:
        raise CredentialIntegrityError() from e
