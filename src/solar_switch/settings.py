from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from solar_switch.errors import ConfigError

FRANK_ENERGIE_API_URL = "https://www.frankenergie.nl/graphql"
PURCHASE_FEE_FEED_IN = -0.012705
CONTRACT_START_DATE = "2025-07-02T00:00:00+02:00"  # July 2, 2025 CEST
PUBLISHER_KINDS = {"iot", "log"}


@dataclass(frozen=True)
class Settings:
    device_id: str
    iot_endpoint: str
    api_url: str = FRANK_ENERGIE_API_URL
    feed_in_fee: float = PURCHASE_FEE_FEED_IN
    contract_start: Optional[datetime] = datetime.fromisoformat(CONTRACT_START_DATE)
    market_timezone: str = "Europe/Amsterdam"
    http_timeout_s: float = 30.0
    publish_timeout_s: float = 30.0
    iot_qos: int = 1
    publisher: str = "iot"
    run_scheduler: bool = False
    schedule_interval_s: float = 3600.0

    @property
    def market_zone(self) -> ZoneInfo:
        return ZoneInfo(self.market_timezone)


def _flag(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes"}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read and validate the environment once.

    Every problem is collected so a single ConfigError names all of them.
    """
    env = os.environ if environ is None else environ
    problems: list[str] = []

    device_id = env.get("SHELLY_CLIENT_ID", "").strip()
    iot_endpoint = env.get("IOT_ENDPOINT", "").strip()
    if not device_id:
        problems.append("SHELLY_CLIENT_ID must be set")
    if not iot_endpoint:
        problems.append("IOT_ENDPOINT must be set")

    def number(name: str, default: float, cast=float):
        raw = env.get(name, "").strip()
        if not raw:
            return default
        try:
            return cast(raw)
        except ValueError:
            problems.append(f"{name} is not a valid number: {raw!r}")
            return default

    feed_in_fee = number("PURCHASE_FEE_FEED_IN", PURCHASE_FEE_FEED_IN)
    http_timeout_s = number("HTTP_TIMEOUT_S", 30.0)
    publish_timeout_s = number("PUBLISH_TIMEOUT_S", 30.0)
    schedule_interval_s = number("SCHEDULE_INTERVAL_S", 3600.0)
    iot_qos = number("IOT_QOS", 1, cast=int)
    if iot_qos not in (0, 1):
        problems.append(f"IOT_QOS must be 0 or 1, got {iot_qos}")
    for name, value in (
        ("HTTP_TIMEOUT_S", http_timeout_s),
        ("PUBLISH_TIMEOUT_S", publish_timeout_s),
        ("SCHEDULE_INTERVAL_S", schedule_interval_s),
    ):
        if value <= 0:
            problems.append(f"{name} must be positive")

    contract_start: Optional[datetime] = None
    raw_contract = env.get("CONTRACT_START_DATE", CONTRACT_START_DATE).strip()
    if raw_contract:
        try:
            contract_start = datetime.fromisoformat(raw_contract.replace("Z", "+00:00"))
        except ValueError:
            problems.append(f"CONTRACT_START_DATE is not an RFC3339 timestamp: {raw_contract!r}")
        else:
            if contract_start.tzinfo is None:
                problems.append("CONTRACT_START_DATE must carry a UTC offset")

    market_timezone = env.get("MARKET_TIMEZONE", "").strip() or "Europe/Amsterdam"
    try:
        ZoneInfo(market_timezone)
    except (ZoneInfoNotFoundError, ValueError):
        problems.append(f"MARKET_TIMEZONE is not a known time zone: {market_timezone!r}")

    publisher = env.get("COMMAND_PUBLISHER", "").strip().lower() or "iot"
    if publisher not in PUBLISHER_KINDS:
        problems.append(f"COMMAND_PUBLISHER must be one of {sorted(PUBLISHER_KINDS)}, got {publisher!r}")

    if problems:
        raise ConfigError(problems)

    return Settings(
        device_id=device_id,
        iot_endpoint=iot_endpoint,
        api_url=env.get("FRANK_ENERGIE_API_URL", "").strip() or FRANK_ENERGIE_API_URL,
        feed_in_fee=feed_in_fee,
        contract_start=contract_start,
        market_timezone=market_timezone,
        http_timeout_s=http_timeout_s,
        publish_timeout_s=publish_timeout_s,
        iot_qos=iot_qos,
        publisher=publisher,
        run_scheduler=_flag(env.get("RUN_SCHEDULER", "false")),
        schedule_interval_s=schedule_interval_s,
    )
