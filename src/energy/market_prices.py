import logging
from datetime import date
from typing import List

import requests
from pydantic import ValidationError

from solar_switch.errors import UpstreamError
from solar_switch.models import PriceInterval
from solar_switch.settings import Settings

logger = logging.getLogger(__name__)

MARKET_PRICES_QUERY = """query MarketPrices($date: String!) {
    marketPrices(date: $date) {
        electricityPrices {
            from
            till
            marketPrice
            perUnit
        }
    }
}"""


def build_request_body(day: date) -> dict:
    return {
        "query": MARKET_PRICES_QUERY,
        "variables": {"date": day.strftime("%Y-%m-%d")},
        "operationName": "MarketPrices",
    }


def parse_market_prices(payload) -> List[PriceInterval]:
    """
    Turn a MarketPrices GraphQL response into price intervals.

    Expected shape:
      {"data": {"marketPrices": {"electricityPrices": [
          {"from": <RFC3339>, "till": <RFC3339>, "marketPrice": <float>, "perUnit": "KWH"}, ...]}}}

    Entries that cannot be parsed are skipped; a body without the price list
    raises UpstreamError.
    """
    if not isinstance(payload, dict):
        raise UpstreamError("Malformed response: expected a JSON object")

    errors = payload.get("errors") or []
    messages = [e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors]

    try:
        raw_prices = payload["data"]["marketPrices"]["electricityPrices"]
    except (KeyError, TypeError):
        if messages:
            raise UpstreamError(f"API returned errors: {'; '.join(messages)}")
        raise UpstreamError("Malformed response: data.marketPrices.electricityPrices missing")

    if not isinstance(raw_prices, list):
        raise UpstreamError("Malformed response: electricityPrices is not a list")
    # Partial errors next to a usable price list only warn.
    if messages:
        logger.warning(f"API returned errors alongside data: {'; '.join(messages)}")

    intervals: List[PriceInterval] = []
    for entry in raw_prices:
        try:
            intervals.append(PriceInterval.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping unparseable price entry {entry!r}: {e.error_count()} error(s)")
    return intervals


def fetch_market_prices(day: date, settings: Settings) -> List[PriceInterval]:
    """Fetch the day-ahead price curve for one calendar date. No retries."""
    body = build_request_body(day)
    headers = {"Content-Type": "application/json"}

    try:
        response = requests.post(
            settings.api_url,
            json=body,
            headers=headers,
            timeout=settings.http_timeout_s,
        )
    except requests.RequestException as e:
        raise UpstreamError(f"Error making request: {e}") from e

    if response.status_code != 200:
        raise UpstreamError(
            f"API returned status code: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError as e:
        raise UpstreamError(f"Error decoding response: {e}", status_code=response.status_code) from e

    intervals = parse_market_prices(payload)
    logger.info(f"Fetched {len(intervals)} price intervals for {body['variables']['date']}")
    return intervals
