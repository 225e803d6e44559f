"""
Subscription merge API endpoint.
"""
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional

from submerge.services.aggregator import get_aggregator, parse_source_urls

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["subscriptions"])


@router.get("/merge-subscriptions")
async def merge_subscriptions(
    urls: Optional[str] = Query(None, description="Comma-separated subscription URLs, later ones override earlier ones"),
):
    """
    Merge several subscription documents into one configuration.

    - **urls**: OrangeTV (`api_site`) or TVBox (`sites`/`parses`/`lives`) JSON documents

    Unreachable sources are skipped. Every merged site carries a `healthy`
    status from a live probe of its API.
    """
    source_urls = parse_source_urls(urls)
    if not source_urls:
        return JSONResponse(
            status_code=400,
            content={"error": "Missing subscription URLs (urls query parameter)"}
        )

    try:
        aggregator = get_aggregator()
        return await aggregator.aggregate(source_urls)
    except Exception as e:
        logger.error(f"Subscription merge failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": str(e)})
