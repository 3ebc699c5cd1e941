from __future__ import annotations
from abc import ABC, abstractmethod


def command_topic(device_id: str) -> str:
    return f"{device_id}/command/switch:0"


class CommandPublisher(ABC):
    kind: str = "abstract"

    @abstractmethod
    def publish(self, *, topic: str, payload: bytes) -> None:
        """
        Deliver one message to ``topic``. Must raise PublishError on any failure.
        """
        raise NotImplementedError
