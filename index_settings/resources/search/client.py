"""Async HTTP client for the search service with connection pooling, timeouts, and graceful shutdown."""

import httpx

from index_settings.config.logging import get_logger
from index_settings.config.storage.search import get_search_config

logger = get_logger(__name__)

_client: httpx.AsyncClient | None = None


def build_search_client(host: str, api_key: str = "", timeout: float = 30, **kwargs) -> httpx.AsyncClient:
    """Build a client for the given host. The API key, if any, is sent as a bearer token."""
    headers: dict[str, str] = {}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return httpx.AsyncClient(base_url=host, headers=headers, timeout=timeout, **kwargs)


def get_search_client() -> httpx.AsyncClient:
    """Return the shared async search client. Creates it on first use."""
    global _client
    if _client is None:
        cfg = get_search_config()
        _client = build_search_client(cfg["host"], cfg["api_key"], cfg["timeout"])
        logger.info(
            "Search async client initialized",
            extra={"host": cfg["host"], "timeout": cfg["timeout"]},
        )
    return _client


async def close_search_client() -> None:
    """Close the search client and release connections. Call on shutdown."""
    global _client
    if _client is not None:
        try:
            await _client.aclose()
            logger.info("Search async client closed")
        except httpx.HTTPError as e:
            logger.warning("Error closing search client", extra={"error": str(e)})
        _client = None
