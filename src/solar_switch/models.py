from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC; aware ones are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def rfc3339(value: datetime) -> str:
    return as_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


class PriceInterval(BaseModel):
    """One bucket of the day-ahead curve, as returned by the market API."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: datetime = Field(..., alias="from")
    end: datetime = Field(..., alias="till")
    price: float = Field(..., alias="marketPrice", allow_inf_nan=False)
    unit: str = Field("", alias="perUnit")

    @field_validator("start", "end")
    @classmethod
    def normalize_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator("unit", mode="before")
    @classmethod
    def unit_none_to_empty(cls, v):
        return "" if v is None else v


class SwitchCommand(str, Enum):
    # Relay states understood by the device firmware. "on" opens the inverter
    # circuit, so it disables solar feed-in.
    ON = "on"
    OFF = "off"


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: SwitchCommand
    market_price: float
    effective_price: float
    reason: str
    timestamp: datetime

    @property
    def disable_solar(self) -> bool:
        return self.command is SwitchCommand.ON

    def to_message(self) -> dict:
        """The switch-command v1 message: command, RFC3339 UTC timestamp, reason."""
        return {
            "command": self.command.value,
            "timestamp": rfc3339(self.timestamp),
            "reason": self.reason,
        }

    def to_payload(self) -> bytes:
        return json.dumps(self.to_message()).encode("utf-8")

    @field_validator("timestamp")
    @classmethod
    def timestamp_utc(cls, v: datetime) -> datetime:
        return as_utc(v).replace(microsecond=0)


class CycleResult(BaseModel):
    status: Literal["published", "skipped", "preview"]
    market_date: Optional[str] = None
    topic: Optional[str] = None
    decision: Optional[Decision] = None
