"""Shared repository plumbing: engine ownership and the insertion clock."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.engine import Engine

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current UTC time, the insertion timestamp for posts and messages."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from backends without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class BaseRepository:
    """Holds the shared engine; each call checks out its own connection."""

    def __init__(self, engine: Engine, *, clock: Clock = utc_now) -> None:
        self._engine = engine
        self._clock = clock
