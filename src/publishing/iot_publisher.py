from __future__ import annotations

import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from publishing.base import CommandPublisher
from solar_switch.errors import PublishError

logger = logging.getLogger(__name__)


class IotDataPublisher(CommandPublisher):
    """Publishes over the AWS IoT data plane HTTPS API."""

    kind = "iot"

    def __init__(self, endpoint: str, qos: int = 1, timeout_s: float = 30.0, client=None):
        self.endpoint_url = endpoint if endpoint.startswith("https://") else f"https://{endpoint}"
        self.qos = qos
        if client is None:
            config = Config(
                connect_timeout=timeout_s,
                read_timeout=timeout_s,
                retries={"total_max_attempts": 1},
            )
            client = boto3.client("iot-data", endpoint_url=self.endpoint_url, config=config)
        self.client = client

    def publish(self, *, topic: str, payload: bytes) -> None:
        try:
            self.client.publish(topic=topic, qos=self.qos, payload=payload)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "unknown")
            raise PublishError(f"Error publishing to IoT Core ({code}): {e}", topic=topic) from e
        except BotoCoreError as e:
            raise PublishError(f"Error publishing to IoT Core: {e}", topic=topic) from e

        logger.info(f"Published {len(payload)} bytes to {topic} via {self.endpoint_url}")
