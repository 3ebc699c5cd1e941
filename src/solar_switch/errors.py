"""Failure types for one control cycle.

All of them are terminal for the current invocation. Nothing is retried
internally; the next hourly trigger starts from scratch.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional


class SolarSwitchError(Exception):
    """Base class for every error raised by the control cycle."""


class ConfigError(SolarSwitchError):
    """Required settings are missing or invalid. Raised before any network call."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("Invalid configuration: " + "; ".join(self.problems))


class UpstreamError(SolarSwitchError):
    """The market price fetch failed (transport, HTTP status or response body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class NoMatchError(SolarSwitchError):
    """No price interval covers the current instant."""

    def __init__(self, instant: datetime, window: Optional[tuple[datetime, datetime]] = None):
        self.instant = instant
        self.window = window
        if window is None:
            covered = "no intervals"
        else:
            covered = f"{window[0].isoformat()} - {window[1].isoformat()}"
        super().__init__(f"No price found for current hour: {instant.isoformat()} (covered: {covered})")


class PublishError(SolarSwitchError):
    """Delivering the command to the device topic failed."""

    def __init__(self, message: str, topic: str):
        self.topic = topic
        super().__init__(message)
