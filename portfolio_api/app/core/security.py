"""
Security helpers for password hashing and bearer token authentication.

Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a per‑password random
salt.  Access tokens are opaque random strings: the client receives
``"<token id>|<secret>"`` once at login, while the database only keeps
the SHA‑256 digest of the secret.  A token stays valid until it is
revoked by logout or, when ``TOKEN_EXPIRE_MINUTES`` is set, until it
expires.

``get_current_user`` is the FastAPI dependency guarding every
protected route.
"""

import hashlib
import hmac
import logging
import os
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..schemas.user import UserRead


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a ``$``
    (salt in hex, then hash in hex).

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Returns ``False`` for a missing or malformed stored value instead
    of raising, so callers can treat every failure the same way.
    """
    if not hashed_password or "$" not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split("$", 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def hash_token(plain: str) -> str:
    """Digest stored in place of a token secret."""
    return hashlib.sha256(plain.encode("utf-8")).hexdigest()


def generate_token() -> Tuple[str, str]:
    """Return a new token secret and its digest."""
    plain = secrets.token_hex(20)
    return plain, hash_token(plain)


def split_token(token: str) -> Tuple[Optional[int], str]:
    """Split ``"<id>|<secret>"`` into its parts.

    Tokens without an id prefix are returned with ``None`` as id; an id
    prefix that is not a number is treated the same way so the lookup
    simply fails.
    """
    if "|" not in token:
        return None, token
    id_part, secret = token.split("|", 1)
    if not id_part.isdigit():
        return None, token
    return int(id_part), secret


@dataclass
class AuthContext:
    """The authenticated caller and the token used for this request."""

    user: UserRead
    token_id: int


security = HTTPBearer(auto_error=False)


def _unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthenticated.",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """Dependency that retrieves the current authenticated user.

    Raises HTTP 401 when the ``Authorization`` header is missing or
    the token is unknown, revoked or expired.  The response never says
    which of these applied.
    """
    from ..services.token_service import TokenService
    from ..services.user_service import UserService

    if credentials is None:
        raise _unauthenticated()
    resolved = await TokenService.resolve(credentials.credentials)
    if resolved is None:
        raise _unauthenticated()
    user_id, token_id = resolved
    user = await UserService.get_by_id(user_id)
    if user is None:
        logger.warning("Token %s refers to missing user %s", token_id, user_id)
        raise _unauthenticated()
    return AuthContext(user=user, token_id=token_id)
