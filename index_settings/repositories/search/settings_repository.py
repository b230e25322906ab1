"""
Async read / replace / patch / reset of index settings, per group and for the whole document.
Writes return a TaskInfo; the change is applied by the service later.
"""

from typing import Any

import httpx

from index_settings.config.logging import get_logger
from index_settings.errors import UnsupportedOperation
from index_settings.repositories.search.base import index_path, request
from index_settings.schema.settings import IndexSettings
from index_settings.schema.task import TaskInfo
from index_settings.services.settings.codec import decode, decode_group, encode_group
from index_settings.services.settings.groups import ALL_SETTINGS, SettingsGroup, get_settings_group

logger = get_logger(__name__)


async def _write(
    index_uid: str,
    group: SettingsGroup,
    method: str,
    body: Any = None,
    client: httpx.AsyncClient | None = None,
) -> TaskInfo:
    path = index_path(index_uid, group.path)
    document = await request(method, path, 202, body=body, client=client)
    # enqueuedAt arrives as an ISO string
    task = decode(TaskInfo, document, strict=False)
    logger.info(
        "Settings write enqueued",
        extra={
            "index_uid": index_uid,
            "group": group.name,
            "method": method,
            "task_uid": task.task_uid,
        },
    )
    return task


async def get_setting_group(
    index_uid: str,
    group: str | SettingsGroup,
    *,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """Read the current, fully resolved value of one group."""
    g = get_settings_group(group)
    document = await request("GET", index_path(index_uid, g.path), 200, client=client)
    return decode_group(g, document)


async def replace_setting_group(
    index_uid: str,
    group: str | SettingsGroup,
    value: Any,
    *,
    client: httpx.AsyncClient | None = None,
) -> TaskInfo:
    """
    Replace one group with value. List groups are PUT as-is. Composite groups are PATCHed with
    the replacement encoding, so sub-fields missing from value return to their defaults.
    """
    g = get_settings_group(group)
    body = encode_group(g, value, replacement=g.patchable)
    return await _write(index_uid, g, g.write_method, body, client)


async def patch_setting_group(
    index_uid: str,
    group: str | SettingsGroup,
    partial: Any,
    *,
    client: httpx.AsyncClient | None = None,
) -> TaskInfo:
    """Merge only the present sub-fields of partial into a composite group (pagination, faceting, typo-tolerance)."""
    g = get_settings_group(group)
    if not g.patchable:
        raise UnsupportedOperation(f"{g.name} is replaced as a whole; use replace_setting_group")
    body = encode_group(g, partial)
    return await _write(index_uid, g, "PATCH", body, client)


async def reset_setting_group(
    index_uid: str,
    group: str | SettingsGroup,
    *,
    client: httpx.AsyncClient | None = None,
) -> TaskInfo:
    """Restore one group to the service default."""
    g = get_settings_group(group)
    return await _write(index_uid, g, "DELETE", client=client)


async def get_settings(index_uid: str, *, client: httpx.AsyncClient | None = None) -> IndexSettings:
    """Read every group of the index as one IndexSettings."""
    document = await request("GET", index_path(index_uid, ALL_SETTINGS.path), 200, client=client)
    return decode_group(ALL_SETTINGS, document)


async def update_settings(
    index_uid: str,
    settings: IndexSettings,
    *,
    client: httpx.AsyncClient | None = None,
) -> TaskInfo:
    """Apply only the groups present in settings; every other group is left unchanged."""
    body = encode_group(ALL_SETTINGS, settings)
    return await _write(index_uid, ALL_SETTINGS, "PATCH", body, client)


async def replace_settings(
    index_uid: str,
    settings: IndexSettings,
    *,
    client: httpx.AsyncClient | None = None,
) -> TaskInfo:
    """Make settings the whole document: groups absent from settings are reset to their defaults."""
    body = encode_group(ALL_SETTINGS, settings, replacement=True)
    return await _write(index_uid, ALL_SETTINGS, "PATCH", body, client)


async def reset_settings(index_uid: str, *, client: httpx.AsyncClient | None = None) -> TaskInfo:
    """Restore every group to the service default."""
    return await _write(index_uid, ALL_SETTINGS, "DELETE", client=client)
