"""Append-only guest message wall."""

from __future__ import annotations

import uuid

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError

from folio.domain.models import GuestMessage
from folio.errors import StorageError
from folio.infrastructure.database.schema import hello_letters
from folio.infrastructure.repositories.base import BaseRepository, as_utc


class MessageRepository(BaseRepository):
    """Encapsulates SQL for the guest message wall."""

    def append(self, name: str, email: str, message: str) -> None:
        """Store a guest message. No validation is performed."""
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(hello_letters).values(
                        id=str(uuid.uuid4()),
                        name=name,
                        email=email,
                        message=message,
                        created_at=self._clock(),
                    )
                )
        except SQLAlchemyError as exc:
            msg = f"Could not insert message: {exc}"
            raise StorageError(msg) from exc

    def recent(self, limit: int) -> list[GuestMessage]:
        """Return up to *limit* messages, newest first. A non-positive limit yields none."""
        if limit < 1:
            return []
        stmt = (
            select(
                hello_letters.c.name,
                hello_letters.c.email,
                hello_letters.c.message,
                hello_letters.c.created_at,
            )
            .order_by(hello_letters.c.created_at.desc(), hello_letters.c.id.desc())
            .limit(limit)
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).fetchall()
        except SQLAlchemyError as exc:
            msg = f"Could not fetch messages: {exc}"
            raise StorageError(msg) from exc

        return [
            GuestMessage(
                name=row.name,
                email=row.email,
                message=row.message,
                created_at=as_utc(row.created_at),
            )
            for row in rows
        ]

    def count(self) -> int:
        """Total stored messages, including those outside the recent window."""
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(select(func.count(hello_letters.c.id))).scalar_one() or 0)
        except SQLAlchemyError as exc:
            msg = f"Could not count messages: {exc}"
            raise StorageError(msg) from exc
