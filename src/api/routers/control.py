import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.controller import SolarController
from api.dependencies import get_controller
from api.workers import run_recorded_cycle
from solar_switch.errors import NoMatchError, PublishError, UpstreamError

router = APIRouter()
logger = logging.getLogger(__name__)


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, NoMatchError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=502, detail=str(e))


@router.post("/run")
async def run_now(controller: SolarController = Depends(get_controller)) -> dict:
    """Run one control cycle immediately and publish the command."""
    try:
        result = await asyncio.to_thread(run_recorded_cycle, controller)
    except (NoMatchError, UpstreamError, PublishError) as e:
        raise _to_http_error(e) from e
    return result.model_dump(mode="json")


@router.get("/decision")
async def preview_decision(controller: SolarController = Depends(get_controller)) -> dict:
    """What the next cycle would publish, without publishing it."""
    try:
        result = await asyncio.to_thread(controller.preview)
    except (NoMatchError, UpstreamError) as e:
        raise _to_http_error(e) from e
    return result.model_dump(mode="json")
