"""Async search service health check; no business logic."""

from typing import Any

import httpx

from index_settings.config.logging import get_logger
from index_settings.resources.search.client import get_search_client

logger = get_logger(__name__)


async def ping_search_service(client: httpx.AsyncClient | None = None) -> dict[str, Any]:
    """
    Ping the search service asynchronously. Returns dict with 'ok' bool and optional 'error' string.
    Used for health checks; does not leak internal details.
    """
    if client is None:
        client = get_search_client()
    try:
        response = await client.get("/health")
    except httpx.TimeoutException as e:
        logger.warning("Search service ping timeout", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_timeout"}
    except httpx.HTTPError as e:
        logger.warning("Search service ping failed", extra={"error": str(type(e).__name__)})
        return {"ok": False, "error": "connection_failed"}
    if response.status_code != 200:
        logger.warning("Search service unavailable", extra={"status_code": response.status_code})
        return {"ok": False, "error": "unavailable"}
    return {"ok": True}
