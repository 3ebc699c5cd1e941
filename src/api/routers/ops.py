from fastapi import APIRouter, Depends, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api.controller import SolarController
from api.dependencies import get_controller

router = APIRouter()


@router.get("/health")
async def health_check(controller: SolarController = Depends(get_controller)) -> dict:
    """Health check endpoint for container orchestration."""
    settings = controller.settings
    return {
        "status": "healthy",
        "device_id": settings.device_id,
        "topic": controller.topic,
        "publisher": controller.publisher.kind,
        "contract_effective": controller.policy.contract_effective(controller.clock()),
    }


@router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus scrape endpoint.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
