from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from solar_switch.errors import NoMatchError
from solar_switch.models import PriceInterval, as_utc

logger = logging.getLogger(__name__)


def covers(interval: PriceInterval, now: datetime) -> bool:
    """Whether ``now`` lies in [start, end). An exact start always matches."""
    return interval.start < now < interval.end or now == interval.start


def find_current_interval(intervals: Sequence[PriceInterval], now: datetime) -> PriceInterval:
    """Return the first interval, in sequence order, that covers ``now``.

    The feed is trusted to be non-overlapping; nothing here sorts or
    de-duplicates it.
    """
    now_utc = as_utc(now)

    for interval in intervals:
        if covers(interval, now_utc):
            logger.info(
                f"Found matching price period: {interval.start.isoformat()} - {interval.end.isoformat()}"
            )
            return interval

    window = None
    if intervals:
        window = (min(i.start for i in intervals), max(i.end for i in intervals))
    raise NoMatchError(now_utc, window)


def find_current_price(intervals: Sequence[PriceInterval], now: datetime) -> float:
    return find_current_interval(intervals, now).price
