import logging
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from energy.intervals import find_current_interval
from energy.market_prices import fetch_market_prices
from energy.policy import FeedInPolicy
from publishing.base import CommandPublisher, command_topic
from publishing.factory import build_publisher
from solar_switch.errors import UpstreamError
from solar_switch.models import CycleResult, Decision, PriceInterval, as_utc
from solar_switch.settings import Settings

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SolarController:
    """Runs one control cycle: gate, fetch, match, decide, publish."""

    def __init__(
        self,
        settings: Settings,
        publisher: Optional[CommandPublisher] = None,
        fetch_prices: Callable[..., List[PriceInterval]] = fetch_market_prices,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.settings = settings
        self.policy = FeedInPolicy.from_settings(settings)
        self.publisher = publisher if publisher is not None else build_publisher(settings)
        self.fetch_prices = fetch_prices
        self.clock = clock

    @property
    def topic(self) -> str:
        return command_topic(self.settings.device_id)

    def market_day(self, now: datetime) -> date:
        """The calendar day of the market curve that holds ``now``."""
        return as_utc(now).astimezone(self.settings.market_zone).date()

    def _contract_effective(self, now: datetime) -> bool:
        effective = self.policy.contract_effective(now)
        if self.policy.contract_start is not None:
            logger.info(
                f"Contract start date: {self.policy.contract_start.isoformat()}, "
                f"current time: {now.isoformat()}, effective: {effective}"
            )
        return effective

    def _decide(self, now: datetime) -> Decision:
        day = self.market_day(now)

        try:
            prices = self.fetch_prices(day, self.settings)
        except UpstreamError as e:
            logger.error(
                f"Error fetching market prices for {day.isoformat()} from {self.settings.api_url} "
                f"(status: {e.status_code}): {e}"
            )
            raise
        except Exception as e:
            logger.error(f"Error fetching market prices for {day.isoformat()} from {self.settings.api_url}: {e}")
            raise

        try:
            interval = find_current_interval(prices, now)
        except Exception as e:
            logger.error(f"Error finding current hour price: {e}")
            raise

        decision = self.policy.decide(interval.price, now)
        logger.info(f"Current market price: €{interval.price:.5f}/kWh")
        logger.info(f"Effective price (market + feed-in fee): €{decision.effective_price:.5f}/kWh")
        logger.info(f"Should disable solar inverter: {decision.disable_solar}")
        return decision

    def preview(self, now: Optional[datetime] = None) -> CycleResult:
        """Same as run_cycle, but nothing is published."""
        now = as_utc(now or self.clock())
        if not self._contract_effective(now):
            return CycleResult(status="skipped")

        decision = self._decide(now)
        return CycleResult(
            status="preview",
            market_date=self.market_day(now).isoformat(),
            topic=self.topic,
            decision=decision,
        )

    def run_cycle(self, now: Optional[datetime] = None) -> CycleResult:
        now = as_utc(now or self.clock())
        logger.info("Starting solar panel control cycle")

        if not self._contract_effective(now):
            logger.info("New energy contract not yet effective. Skipping solar panel control.")
            return CycleResult(status="skipped")

        decision = self._decide(now)
        topic = self.topic

        try:
            self.publisher.publish(topic=topic, payload=decision.to_payload())
        except Exception as e:
            logger.error(f"Error sending IoT command to {topic}: {e}")
            raise

        logger.info(f"Successfully published IoT command: {decision.command.value} to topic: {topic}")
        return CycleResult(
            status="published",
            market_date=self.market_day(now).isoformat(),
            topic=topic,
            decision=decision,
        )
