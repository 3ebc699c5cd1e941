from datetime import datetime, timedelta, timezone

import pytest
import requests

from publishing.base import CommandPublisher
from solar_switch.errors import PublishError
from solar_switch.settings import Settings


class RecordingPublisher(CommandPublisher):
    kind = "recording"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published = []

    def publish(self, *, topic: str, payload: bytes) -> None:
        if self.fail:
            raise PublishError("broker unavailable", topic=topic)
        self.published.append((topic, payload))


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self._text, 0)
        return self._payload


def hourly_curve(day: str, prices: dict = None, default: float = 0.10) -> list:
    """24 contiguous hourly buckets in wire format, starting at 00:00 UTC of ``day``."""
    prices = prices or {}
    start = datetime.fromisoformat(day).replace(tzinfo=timezone.utc)
    out = []
    for hour in range(24):
        s = start + timedelta(hours=hour)
        e = s + timedelta(hours=1)
        out.append({
            "from": s.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            "till": e.strftime("%Y-%m-%dT%H:%M:%S.000Z"),
            "marketPrice": prices.get(hour, default),
            "perUnit": "KWH",
        })
    return out


def market_response(entries: list) -> dict:
    return {"data": {"marketPrices": {"electricityPrices": entries}}}


@pytest.fixture
def settings():
    return Settings(
        device_id="test-device",
        iot_endpoint="example-ats.iot.eu-west-1.amazonaws.com",
        contract_start=None,
        publisher="log",
    )


@pytest.fixture
def recording_publisher():
    return RecordingPublisher()


@pytest.fixture
def curve_factory():
    return hourly_curve
