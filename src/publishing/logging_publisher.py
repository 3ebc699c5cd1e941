from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Tuple

from publishing.base import CommandPublisher

logger = logging.getLogger(__name__)


class LoggingPublisher(CommandPublisher):
    """Dry-run publisher: logs the message and keeps the most recent ones in memory."""

    kind = "log"

    def __init__(self, keep: int = 24):
        self.published: Deque[Tuple[str, bytes]] = deque(maxlen=keep)

    def publish(self, *, topic: str, payload: bytes) -> None:
        logger.info(f"[dry-run] {topic} <- {payload.decode('utf-8')}")
        self.published.append((topic, payload))
