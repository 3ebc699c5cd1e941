import asyncio
import logging

from fastapi import FastAPI

from api.dependencies import get_controller, get_settings
from api.routers import control, ops
from api.workers import _scheduler_worker

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="solar-switch")
app.include_router(ops.router)
app.include_router(control.router)


@app.on_event("startup")
async def startup() -> None:
    # Validate configuration before anything touches the network.
    settings = get_settings()
    controller = get_controller()
    logger.info(
        f"Controlling {controller.topic} via {controller.publisher.kind} publisher"
    )

    if settings.run_scheduler:
        app.state.scheduler_task = asyncio.create_task(
            _scheduler_worker(controller, settings.schedule_interval_s)
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
