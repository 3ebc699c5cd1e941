"""
AWS Lambda entry point, invoked hourly by a scheduled rule with an empty event.
"""
import logging

from api.controller import SolarController
from solar_switch.settings import load_settings

# Configure logging for Lambda
logger = logging.getLogger()
logger.setLevel(logging.INFO)


def lambda_handler(event, context):
    """
    Run one solar panel control cycle.

    Returns:
        dict: statusCode and the cycle result. Any failure is logged and
        re-raised so the invocation shows up as failed.
    """
    try:
        settings = load_settings()
        controller = SolarController(settings)
        result = controller.run_cycle()
    except Exception:
        logger.exception("Solar panel control failed")
        raise

    logger.info("Solar panel control completed successfully")
    return {
        "statusCode": 200,
        "body": result.model_dump(mode="json"),
    }
