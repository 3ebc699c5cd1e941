from __future__ import annotations

from publishing.base import CommandPublisher
from publishing.iot_publisher import IotDataPublisher
from publishing.logging_publisher import LoggingPublisher
from solar_switch.settings import Settings


def build_publisher(settings: Settings) -> CommandPublisher:
    if settings.publisher == "log":
        return LoggingPublisher()
    return IotDataPublisher(
        endpoint=settings.iot_endpoint,
        qos=settings.iot_qos,
        timeout_s=settings.publish_timeout_s,
    )
