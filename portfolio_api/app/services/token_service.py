"""
Storage of bearer access tokens.

A token moves through three states: issued at login, active while it
authenticates requests, revoked at logout.  Revocation deletes the
row, so a revoked token can never be resolved again.
"""

import logging
from typing import Optional, Tuple

from ..core.config import settings
from ..core.db import get_connection
from ..core.security import generate_token, hash_token, split_token


logger = logging.getLogger(__name__)


class TokenService:
    """Issue, resolve and revoke access tokens."""

    @classmethod
    async def issue(cls, user_id: int, name: str = "auth_token") -> str:
        """Create a token for ``user_id`` and return its plain text form.

        The plain text is only available here; the database keeps the
        digest.  When ``settings.token_expire_minutes`` is positive the
        token carries an expiry timestamp.
        """
        plain, digest = generate_token()
        minutes = settings.token_expire_minutes
        conn = get_connection()
        try:
            cursor = conn.cursor()
            if minutes > 0:
                cursor.execute(
                    "INSERT INTO access_tokens (user_id, name, token_hash, expires_at) "
                    "VALUES (?, ?, ?, datetime('now', ?))",
                    (user_id, name, digest, f"+{minutes} minutes"),
                )
            else:
                cursor.execute(
                    "INSERT INTO access_tokens (user_id, name, token_hash) VALUES (?, ?, ?)",
                    (user_id, name, digest),
                )
            token_id = cursor.lastrowid
            conn.commit()
        finally:
            conn.close()
        logger.info("Issued token %s for user %s", token_id, user_id)
        return f"{token_id}|{plain}"

    @classmethod
    async def resolve(cls, token: str) -> Optional[Tuple[int, int]]:
        """Return ``(user_id, token_id)`` for an active token, else ``None``."""
        token_id, secret = split_token(token)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                "SELECT id, user_id FROM access_tokens "
                "WHERE token_hash = ? AND (expires_at IS NULL OR expires_at > CURRENT_TIMESTAMP)",
                (hash_token(secret),),
            ).fetchone()
            if row is None or (token_id is not None and row["id"] != token_id):
                return None
            cursor.execute(
                "UPDATE access_tokens SET last_used_at = CURRENT_TIMESTAMP WHERE id = ?",
                (row["id"],),
            )
            conn.commit()
            return row["user_id"], row["id"]
        finally:
            conn.close()

    @classmethod
    async def revoke(cls, token_id: int) -> bool:
        """Delete a token.  Returns ``True`` if it existed."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM access_tokens WHERE id = ?", (token_id,))
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if affected:
            logger.info("Revoked token %s", token_id)
        return affected > 0
