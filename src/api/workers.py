import asyncio
import logging
import time

from api.controller import SolarController
from api.metrics import (
    COMMANDS_PUBLISHED_TOTAL,
    CYCLE_LATENCY_SECONDS,
    CYCLES_TOTAL,
    EFFECTIVE_PRICE_EUR,
)
from solar_switch.errors import SolarSwitchError
from solar_switch.models import CycleResult

logger = logging.getLogger(__name__)


def run_recorded_cycle(controller: SolarController) -> CycleResult:
    """Run one cycle and record its outcome in the Prometheus metrics."""
    started = time.perf_counter()
    try:
        result = controller.run_cycle()
    except SolarSwitchError as e:
        CYCLES_TOTAL.labels(outcome=type(e).__name__).inc()
        raise
    except Exception:
        CYCLES_TOTAL.labels(outcome="unexpected").inc()
        raise
    finally:
        CYCLE_LATENCY_SECONDS.observe(time.perf_counter() - started)

    CYCLES_TOTAL.labels(outcome=result.status).inc()
    if result.decision is not None:
        EFFECTIVE_PRICE_EUR.set(result.decision.effective_price)
        COMMANDS_PUBLISHED_TOTAL.labels(command=result.decision.command.value).inc()
    return result


async def _scheduler_worker(controller: SolarController, interval_s: float) -> None:
    """In-process stand-in for the hourly trigger."""
    logger.info(f"Scheduler worker started (every {interval_s:.0f}s)")

    while True:
        try:
            await asyncio.to_thread(run_recorded_cycle, controller)
        except SolarSwitchError as e:
            # Recovery is the next tick.
            logger.error(f"Scheduled cycle failed: {e}")
        except Exception:
            logger.exception("Scheduled cycle failed unexpectedly")
        await asyncio.sleep(interval_s)
