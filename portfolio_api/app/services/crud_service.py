"""
Generic single-table CRUD service.

Every portfolio resource (members, countries, projects, services) is
a flat table of scalar columns validated by a Pydantic rule table.
Instead of one service class per table, a ``Resource`` describes the
table, its rule table and its unique columns, and ``CRUDService``
implements list/create/read/update/delete for any ``Resource``.

Updates replace every validated field: optional fields omitted from
the payload are stored as ``NULL``, and required fields must always
be present.

Uniqueness is checked before writing so that a duplicate value is
reported together with the other validation errors, and is enforced
again by the ``UNIQUE`` constraint of the table: when two concurrent
requests race past the check, the loser's ``IntegrityError`` is turned
into the same validation error.
"""

import logging
import sqlite3
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel

from ..core.db import get_connection
from ..core.errors import NotFound, ValidationFailed
from ..core.validation import ExtraRule, validate_payload


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    """Static description of a CRUD resource.

    Attributes:
        name: Route segment under ``/crud``, e.g. ``membres``.
        table: Database table holding the rows.
        label: Human readable name used in response messages.
        schema: Pydantic rule table shared by create and update.
        unique: Columns whose values must be unique across the table.
        aliases: Additional route segments serving the same resource.
    """

    name: str
    table: str
    label: str
    schema: Type[BaseModel]
    unique: Tuple[str, ...] = ()
    aliases: Tuple[str, ...] = ()

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(self.schema.model_fields)


def _taken(field: str) -> str:
    return f"The {field.replace('_', ' ')} has already been taken."


class CRUDService:
    """CRUD operations over the table described by a ``Resource``.

    Table and column names come from the static ``Resource`` and are
    never taken from request data; all values are bound as parameters.
    """

    def __init__(self, resource: Resource) -> None:
        self.resource = resource

    async def list_items(self) -> List[Dict[str, Any]]:
        """Return every row of the table ordered by id."""
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT * FROM {self.resource.table} ORDER BY id").fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()

    async def get(self, item_id: int) -> Dict[str, Any]:
        """Return a single row.  Raises ``NotFound`` if it does not exist."""
        conn = get_connection()
        try:
            row = self._fetch(conn, item_id)
        finally:
            conn.close()
        if row is None:
            raise NotFound(self.resource.label)
        return dict(row)

    async def create(self, raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Validate ``raw``, insert a new row and return it."""
        fields = validate_payload(self.resource.schema, raw, self._unique_rules())
        columns = self.resource.columns
        placeholders = ", ".join("?" for _ in columns)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"INSERT INTO {self.resource.table} ({', '.join(columns)}) VALUES ({placeholders})",
                    tuple(fields[column] for column in columns),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                self._raise_for_integrity_error(exc)
            item_id = cursor.lastrowid
            conn.commit()
            row = self._fetch(conn, item_id)
        finally:
            conn.close()
        logger.info("Created %s %s", self.resource.table, item_id)
        return dict(row)

    async def update(self, item_id: int, raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Replace every validated field of an existing row.

        Raises ``NotFound`` before validating when the row is absent.
        The uniqueness check ignores the row being updated, so saving a
        record with its own unchanged e‑mail succeeds.
        """
        await self.get(item_id)
        fields = validate_payload(
            self.resource.schema, raw, self._unique_rules(exclude_id=item_id)
        )
        columns = self.resource.columns
        assignments = ", ".join(f"{column} = ?" for column in columns)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"UPDATE {self.resource.table} SET {assignments}, updated_at = CURRENT_TIMESTAMP "
                    "WHERE id = ?",
                    tuple(fields[column] for column in columns) + (item_id,),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                self._raise_for_integrity_error(exc)
            affected = cursor.rowcount
            conn.commit()
            row = self._fetch(conn, item_id)
        finally:
            conn.close()
        if not affected or row is None:
            # Deleted between the existence check and the update.
            raise NotFound(self.resource.label)
        logger.info("Updated %s %s", self.resource.table, item_id)
        return dict(row)

    async def delete(self, item_id: int) -> None:
        """Delete a row.  Raises ``NotFound`` if it does not exist."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(f"DELETE FROM {self.resource.table} WHERE id = ?", (item_id,))
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if not affected:
            raise NotFound(self.resource.label)
        logger.info("Deleted %s %s", self.resource.table, item_id)

    def _fetch(self, conn: sqlite3.Connection, item_id: int) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT * FROM {self.resource.table} WHERE id = ?",
            (item_id,),
        ).fetchone()

    def _unique_rules(self, exclude_id: Optional[int] = None) -> List[ExtraRule]:
        return [
            (field, partial(self._check_unique, field, exclude_id=exclude_id))
            for field in self.resource.unique
        ]

    def _check_unique(self, field: str, value: Any, exclude_id: Optional[int] = None) -> Optional[str]:
        query = f"SELECT 1 FROM {self.resource.table} WHERE {field} = ?"
        params: Tuple[Any, ...] = (value,)
        if exclude_id is not None:
            query += " AND id != ?"
            params += (exclude_id,)
        conn = get_connection()
        try:
            row = conn.execute(query, params).fetchone()
        finally:
            conn.close()
        return _taken(field) if row else None

    def _raise_for_integrity_error(self, exc: sqlite3.IntegrityError) -> None:
        """Convert a unique constraint violation into a validation error.

        SQLite reports ``UNIQUE constraint failed: <table>.<column>``.
        Any other integrity error is re-raised unchanged.
        """
        message = str(exc)
        for field in self.resource.unique:
            if f"{self.resource.table}.{field}" in message:
                logger.info("Concurrent duplicate %s rejected for %s", field, self.resource.table)
                raise ValidationFailed({field: [_taken(field)]}) from exc
        raise exc
