from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from solar_switch.models import Decision, SwitchCommand, as_utc
from solar_switch.settings import PURCHASE_FEE_FEED_IN, Settings


@dataclass(frozen=True)
class FeedInPolicy:
    """Maps the current market price to a relay command.

    Feeding in costs ``feed_in_fee`` on top of the market price. Once the sum
    is negative, exporting solar power costs money and the inverter is cut.
    """

    feed_in_fee: float = PURCHASE_FEE_FEED_IN
    contract_start: Optional[datetime] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "FeedInPolicy":
        return cls(feed_in_fee=settings.feed_in_fee, contract_start=settings.contract_start)

    def contract_effective(self, now: datetime) -> bool:
        """False until the dynamic-price contract has started."""
        if self.contract_start is None:
            return True
        return as_utc(now) >= as_utc(self.contract_start)

    def effective_price(self, market_price: float) -> float:
        return market_price + self.feed_in_fee

    def decide(self, market_price: float, now: datetime) -> Decision:
        effective = self.effective_price(market_price)

        # Strict comparison: exactly 0.0 keeps solar enabled.
        if effective < 0:
            command = SwitchCommand.ON
            reason = f"Effective price (€{effective:.5f}/kWh) < 0 - disabling solar production"
        else:
            command = SwitchCommand.OFF
            reason = f"Effective price (€{effective:.5f}/kWh) >= 0 - solar production profitable"

        return Decision(
            command=command,
            market_price=market_price,
            effective_price=effective,
            reason=reason,
            timestamp=now,
        )
