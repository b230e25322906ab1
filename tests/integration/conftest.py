"""
In-process fake of the search service settings endpoints.

Writes are applied immediately and answered with 202 task records; reads return the
resolved document. Defaults match what the service reports for a fresh index.
"""

import copy
from typing import Any

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

DEFAULT_SETTINGS: dict[str, Any] = {
    "displayedAttributes": ["*"],
    "searchableAttributes": ["*"],
    "filterableAttributes": [],
    "sortableAttributes": [],
    "rankingRules": ["words", "typo", "proximity", "attribute", "sort", "exactness"],
    "stopWords": [],
    "synonyms": {},
    "distinctAttribute": None,
    "typoTolerance": {
        "enabled": True,
        "minWordSizeForTypos": {"oneTypo": 5, "twoTypos": 9},
        "disableOnWords": [],
        "disableOnAttributes": [],
    },
    "faceting": {"maxValuesPerFacet": 100},
    "pagination": {"maxTotalHits": 1000},
}

GROUP_KEYS = {
    "synonyms": "synonyms",
    "stop-words": "stopWords",
    "ranking-rules": "rankingRules",
    "filterable-attributes": "filterableAttributes",
    "sortable-attributes": "sortableAttributes",
    "distinct-attribute": "distinctAttribute",
    "searchable-attributes": "searchableAttributes",
    "displayed-attributes": "displayedAttributes",
    "pagination": "pagination",
    "faceting": "faceting",
    "typo-tolerance": "typoTolerance",
}

COMPOSITE_KEYS = {"pagination", "faceting", "typoTolerance"}

# Objects merged key by key on PATCH; every other value is replaced whole
MERGED_KEYS = COMPOSITE_KEYS | {"minWordSizeForTypos"}


def _merge(current: dict[str, Any], patch: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    """Apply a PATCH body: null restores the default, nested objects merge, anything else replaces."""
    merged = copy.deepcopy(current)
    for key, value in patch.items():
        if value is None:
            merged[key] = copy.deepcopy(defaults.get(key))
        elif key in MERGED_KEYS and isinstance(value, dict):
            merged[key] = _merge(merged.get(key) or {}, value, defaults[key])
        else:
            merged[key] = value
    return merged


def _invalid(code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": message, "code": code, "type": "invalid_request", "link": None},
    )


def _check_typo_tolerance(value: dict[str, Any]) -> JSONResponse | None:
    sizes = value.get("minWordSizeForTypos") or {}
    if sizes.get("oneTypo", 0) > sizes.get("twoTypos", 255):
        return _invalid(
            "invalid_settings_typo_tolerance",
            "`minWordSizeForTypos` setting is invalid. `oneTypo` must be less than or equal to `twoTypos`.",
        )
    return None


def create_fake_search_service() -> FastAPI:
    app = FastAPI(title="Fake search service")
    app.state.indexes = {}
    app.state.requests = []
    app.state.next_task_uid = 0

    def settings_of(index_uid: str) -> dict[str, Any]:
        return app.state.indexes.setdefault(index_uid, copy.deepcopy(DEFAULT_SETTINGS))

    def enqueue(index_uid: str) -> JSONResponse:
        task_uid = app.state.next_task_uid
        app.state.next_task_uid += 1
        return JSONResponse(
            status_code=202,
            content={
                "taskUid": task_uid,
                "indexUid": index_uid,
                "status": "enqueued",
                "type": "settingsUpdate",
                "enqueuedAt": "2026-10-17T09:00:00.000000Z",
            },
        )

    async def body_of(request: Request) -> Any:
        raw = await request.body()
        body = await request.json() if raw else None
        app.state.requests.append((request.method, request.url.path, body))
        return body

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "available"}

    @app.get("/indexes/{index_uid}/settings")
    async def get_all(index_uid: str) -> dict[str, Any]:
        return settings_of(index_uid)

    @app.patch("/indexes/{index_uid}/settings")
    async def patch_all(index_uid: str, request: Request):
        body = await body_of(request)
        merged = _merge(settings_of(index_uid), body, DEFAULT_SETTINGS)
        rejected = _check_typo_tolerance(merged["typoTolerance"])
        if rejected:
            return rejected
        app.state.indexes[index_uid] = merged
        return enqueue(index_uid)

    @app.delete("/indexes/{index_uid}/settings")
    async def reset_all(index_uid: str, request: Request):
        await body_of(request)
        app.state.indexes[index_uid] = copy.deepcopy(DEFAULT_SETTINGS)
        return enqueue(index_uid)

    @app.get("/indexes/{index_uid}/settings/{group}")
    async def get_group(index_uid: str, group: str):
        key = GROUP_KEYS.get(group)
        if key is None:
            return JSONResponse(status_code=404, content={"message": "Not found", "code": "not_found"})
        return JSONResponse(content=settings_of(index_uid)[key])

    @app.put("/indexes/{index_uid}/settings/{group}")
    async def put_group(index_uid: str, group: str, request: Request):
        key = GROUP_KEYS.get(group)
        if key is None or key in COMPOSITE_KEYS:
            return JSONResponse(status_code=405, content={"message": "Method not allowed"})
        body = await body_of(request)
        settings_of(index_uid)[key] = copy.deepcopy(DEFAULT_SETTINGS[key]) if body is None else body
        return enqueue(index_uid)

    @app.patch("/indexes/{index_uid}/settings/{group}")
    async def patch_group(index_uid: str, group: str, request: Request):
        key = GROUP_KEYS.get(group)
        if key not in COMPOSITE_KEYS:
            return JSONResponse(status_code=405, content={"message": "Method not allowed"})
        body = await body_of(request)
        merged = _merge(settings_of(index_uid), {key: body}, DEFAULT_SETTINGS)
        if key == "typoTolerance":
            rejected = _check_typo_tolerance(merged[key])
            if rejected:
                return rejected
        app.state.indexes[index_uid] = merged
        return enqueue(index_uid)

    @app.delete("/indexes/{index_uid}/settings/{group}")
    async def reset_group(index_uid: str, group: str, request: Request):
        key = GROUP_KEYS.get(group)
        if key is None:
            return JSONResponse(status_code=404, content={"message": "Not found", "code": "not_found"})
        await body_of(request)
        settings_of(index_uid)[key] = copy.deepcopy(DEFAULT_SETTINGS[key])
        return enqueue(index_uid)

    return app


@pytest.fixture()
def fake_service() -> FastAPI:
    """A fresh fake service per test."""
    return create_fake_search_service()


@pytest.fixture()
def search_client(fake_service: FastAPI) -> httpx.AsyncClient:
    """Client routed to the fake service in-process."""
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=fake_service), base_url="http://search.test")
