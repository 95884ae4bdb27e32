"""
Outgoing email dispatch.

No mail provider is wired up: the dispatcher records what would have been
sent and hands back a message id.
"""

import logging
import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DispatchResult(BaseModel):
    success: bool
    message_id: str
    recipient: str


@runtime_checkable
class IEmailDispatcher(Protocol):
    async def send(self, recipient: str, subject: str, body: str) -> DispatchResult:
        ...


class LoggingEmailDispatcher:
    """Logs each email instead of delivering it."""

    def __init__(self, demo: bool = False):
        self._demo = demo

    async def send(self, recipient: str, subject: str, body: str) -> DispatchResult:
        message_id = "demo-message-id" if self._demo else f"msg-{uuid.uuid4().hex[:12]}"
        logger.info(f"Email would be sent to {recipient}: {subject!r} ({message_id})")
        return DispatchResult(success=True, message_id=message_id, recipient=recipient)
