"""
Business logic for users.

Users are the accounts allowed to log in to the API.  There is no
public registration endpoint: accounts are created with
``create_user.py`` and only authenticate through ``/auth/login``.
Passwords are stored as PBKDF2 hashes (see ``core.security``).
"""

import logging
import sqlite3
from typing import Optional

from ..core.db import get_connection
from ..core.security import hash_password, verify_password
from ..schemas.user import UserRead


logger = logging.getLogger(__name__)


class UserService:
    """Сервис для работы с учётными записями пользователей."""

    @classmethod
    async def create_user(cls, name: str, email: str, password: str) -> UserRead:
        """Create a new user and return it.

        Raises ``ValueError`` if the e‑mail is already registered.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                    (name, email, hash_password(password)),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ValueError(f"User {email} already exists") from exc
            user_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        logger.info("Registered user %s", user_id)
        return cls._row_to_user(row)

    @classmethod
    async def get_by_id(cls, user_id: int) -> Optional[UserRead]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        return cls._row_to_user(row) if row else None

    @classmethod
    async def get_by_email(cls, email: str) -> Optional[UserRead]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        finally:
            conn.close()
        return cls._row_to_user(row) if row else None

    @classmethod
    async def authenticate(cls, email: str, password: str) -> Optional[UserRead]:
        """Authenticate a user by email and password.

        Returns ``UserRead`` if the credentials match, otherwise
        ``None``.  Unknown e‑mails and wrong passwords are not
        distinguished.
        """
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        finally:
            conn.close()
        if row is None or not verify_password(password, row["password"]):
            return None
        return cls._row_to_user(row)

    @classmethod
    async def set_password(cls, email: str, password: str) -> bool:
        """Replace the password of the user with ``email``.

        Returns ``False`` if no such user exists.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE users SET password = ?, updated_at = CURRENT_TIMESTAMP WHERE email = ?",
                (hash_password(password), email),
            )
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if affected:
            logger.info("Password updated for user %s", email)
        return affected > 0

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> UserRead:
        """Convert a database row to a UserRead, dropping the password hash."""
        return UserRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
