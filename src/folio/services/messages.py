"""MessageService: the guest "hello" wall.

The read path degrades instead of failing: the message wall is
decorative, so a backend error yields an empty list plus a warning.
"""

from __future__ import annotations

import logging

import structlog

from folio.config.logging import operation
from folio.errors import StorageError
from folio.services.base import BaseService
from folio.services.result import ServiceResult

logger = logging.getLogger(__name__)


class MessageService(BaseService):
    """Handles appending and listing guest messages."""

    def leave_message(self, name: str, email: str, message: str) -> ServiceResult:
        """Append a guest message. Fields are stored as given."""
        op = "leave_message"
        with operation(op):
            try:
                self._site.messages.append(name, email, message)
            except StorageError as exc:
                logger.error("leave_message failed: %s", exc)
                return ServiceResult.failure(op, "STORAGE_ERROR", str(exc))
            structlog.get_logger(__name__).info(
                "message_stored", name=name, email=email, length=len(message)
            )
        return ServiceResult(ok=True, op=op, data={"name": name})

    def recent_messages(self, limit: int | None = None) -> ServiceResult:
        """Most recent messages, newest first; empty on backend failure.

        *limit* defaults to ``[messages] recent_limit``; zero or less
        returns no messages.
        """
        op = "recent_messages"
        size = self._site.settings.messages.recent_limit if limit is None else limit
        with operation(op, limit=size):
            try:
                messages = self._site.messages.recent(size)
            except StorageError as exc:
                logger.warning("Message wall unavailable: %s", exc)
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"messages": [], "count": 0},
                    warnings=["Messages are temporarily unavailable"],
                )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "messages": [m.model_dump(mode="json") for m in messages],
                "count": len(messages),
            },
        )
