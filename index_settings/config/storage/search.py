"""Search service connection config (read from settings). Read-only; no business logic."""

from index_settings.config.settings import get_settings


def get_search_config() -> dict:
    """Return search service connection parameters from settings for use by resources."""
    s = get_settings()
    return {
        "host": s.search_host,
        "api_key": s.search_api_key,
        "timeout": s.search_timeout,
    }
