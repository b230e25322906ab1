"""Shared async request path to the search service: status check and error translation."""

from typing import Any

import httpx

from index_settings.config.logging import get_logger
from index_settings.errors import DecodeError, DeferredValidationError, ServiceError
from index_settings.resources.search.client import get_search_client

logger = get_logger(__name__)

# Error codes the service uses when it rejects settings content
INVALID_SETTINGS_CODE_PREFIX = "invalid_settings"


def index_path(index_uid: str, suffix: str = "") -> str:
    """Path of an index resource, e.g. /indexes/movies/settings/stop-words."""
    return f"/indexes/{index_uid}{suffix}"


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _translate_status_error(method: str, path: str, response: httpx.Response, expected: int) -> ServiceError:
    """Wrap an unexpected response into ServiceError, or DeferredValidationError for rejected settings."""
    body = _parse_body(response)
    code = error_type = None
    message = f"{method} {path} returned {response.status_code}, expected {expected}"
    if isinstance(body, dict):
        code = body.get("code")
        error_type = body.get("type")
        if body.get("message"):
            message = f"{message}: {body['message']}"
    logger.warning(
        "Search service request failed",
        extra={"method": method, "path": path, "status_code": response.status_code, "code": code},
    )
    error_cls = DeferredValidationError if (code or "").startswith(INVALID_SETTINGS_CODE_PREFIX) else ServiceError
    return error_cls(message, status_code=response.status_code, body=body, code=code, error_type=error_type)


async def request(
    method: str,
    path: str,
    expected_status: int,
    *,
    body: Any = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """
    Send one request and return the parsed JSON body (None when empty).
    Any status other than expected_status raises ServiceError; transport failures too (status_code=None).
    A success body that is not JSON raises DecodeError.
    """
    if client is None:
        client = get_search_client()
    kwargs: dict[str, Any] = {}
    if body is not None:
        kwargs["json"] = body
    elif method in ("PUT", "PATCH"):
        # httpx drops json=None; a null body is a meaningful write here
        kwargs["content"] = b"null"
        kwargs["headers"] = {"Content-Type": "application/json"}
    try:
        response = await client.request(method, path, **kwargs)
    except httpx.HTTPError as e:
        logger.warning(
            "Search service unreachable",
            extra={"method": method, "path": path, "error_type": type(e).__name__},
        )
        raise ServiceError(f"{method} {path} failed: {type(e).__name__}", cause=e) from e

    if response.status_code != expected_status:
        raise _translate_status_error(method, path, response, expected_status)

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(
            path, [{"loc": (), "msg": "response body is not JSON", "type": "json_invalid"}], cause=e
        ) from e
