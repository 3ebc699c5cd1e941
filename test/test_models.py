import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from solar_switch.models import CycleResult, Decision, PriceInterval, SwitchCommand

CEST = timezone(timedelta(hours=2))


def test_price_interval_from_wire_fields():
    i = PriceInterval.model_validate({
        "from": "2025-07-10T14:00:00.000Z",
        "till": "2025-07-10T15:00:00.000Z",
        "marketPrice": -0.01,
        "perUnit": "KWH",
    })
    assert i.start == datetime(2025, 7, 10, 14, tzinfo=timezone.utc)
    assert i.end - i.start == timedelta(hours=1)
    assert i.price == -0.01
    assert i.unit == "KWH"


def test_price_interval_offsets_normalized_to_utc():
    i = PriceInterval.model_validate({
        "from": "2025-07-10T16:00:00+02:00",
        "till": "2025-07-10T17:00:00+02:00",
        "marketPrice": 0.2,
        "perUnit": None,
    })
    assert i.start.utcoffset() == timedelta(0)
    assert i.start.hour == 14
    assert i.unit == ""


def test_naive_timestamps_taken_as_utc():
    i = PriceInterval(start=datetime(2025, 7, 10, 3), end=datetime(2025, 7, 10, 4), price=0.1)
    assert i.start.tzinfo is not None
    assert i.start.hour == 3


def test_price_interval_is_immutable():
    i = PriceInterval(start=datetime(2025, 7, 10, 3), end=datetime(2025, 7, 10, 4), price=0.1)
    with pytest.raises(ValidationError):
        i.price = 1.0


def test_price_interval_rejects_garbage_price():
    with pytest.raises(ValidationError):
        PriceInterval.model_validate({"from": "2025-07-10T03:00:00Z", "till": "2025-07-10T04:00:00Z", "marketPrice": "cheap"})


def test_decision_payload_is_switch_command_v1():
    d = Decision(
        command=SwitchCommand.ON,
        market_price=-0.01,
        effective_price=-0.022705,
        reason="negative",
        timestamp=datetime(2025, 7, 10, 16, 30, 12, 999, tzinfo=CEST),
    )
    message = json.loads(d.to_payload())
    assert message == {"command": "on", "timestamp": "2025-07-10T14:30:12Z", "reason": "negative"}
    assert d.disable_solar is True


def test_cycle_result_serializes_decision():
    d = Decision(
        command=SwitchCommand.OFF,
        market_price=0.1,
        effective_price=0.087295,
        reason="ok",
        timestamp=datetime(2025, 7, 10, 14, 30, tzinfo=timezone.utc),
    )
    body = CycleResult(status="published", topic="dev/command/switch:0", decision=d).model_dump(mode="json")
    assert body["decision"]["command"] == "off"
    assert body["status"] == "published"


@pytest.mark.parametrize("price", [float("nan"), float("inf"), float("-inf")])
def test_price_interval_rejects_non_finite_price(price):
    with pytest.raises(ValidationError):
        PriceInterval.model_validate({"from": "2025-07-10T03:00:00Z", "till": "2025-07-10T04:00:00Z", "marketPrice": price})
