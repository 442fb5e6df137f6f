# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""FastAPI façade that exposes BubbleDataClient operations over HTTP."""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from ..client import BubbleDataClient
from ..core.config import BubbleConfig
from ..core.errors import BubbleError, HttpError
from ..models.constraints import ConstraintType, ConstraintsBuilder
from ._helpers import generate_random_articles

logger = logging.getLogger(__name__)

_REQUIRED_ENV_VARS = (
    "BUBBLE_DATA_URL",
    "BUBBLE_API_KEY",
)

DEMO_THING_TYPE = "Article"


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise RuntimeError(f"Environment variable '{name}' is required.")
    return value


@lru_cache(maxsize=1)
def _bubble_client() -> BubbleDataClient:
    for env_name in _REQUIRED_ENV_VARS:
        _require_env(env_name)
    config = BubbleConfig.from_env()
    return BubbleDataClient(config.base_url, config.api_key, config)


def _parse_constraints(raw: Optional[str]) -> List[Dict[str, Any]]:
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail={"message": f"constraints is not valid JSON: {exc}"}) from exc
    if not isinstance(parsed, list) or not all(isinstance(c, dict) for c in parsed):
        raise HTTPException(status_code=400, detail={"message": "constraints must be a JSON array of objects"})
    return parsed


def _translate_error(exc: Exception) -> HTTPException:
    if isinstance(exc, HttpError):
        return HTTPException(status_code=exc.status_code or 502, detail=exc.to_dict())
    if isinstance(exc, BubbleError):
        return HTTPException(status_code=400, detail=exc.to_dict())
    logger.exception("Unhandled error while calling the Data API")
    return HTTPException(status_code=500, detail={"message": str(exc)})


class ThingPayload(BaseModel):
    data: Dict[str, Any] = Field(..., description="Field names mapped to values.")


class BulkPayload(BaseModel):
    things: List[Dict[str, Any]] = Field(..., min_length=1, description="One object per thing to create.")


app = FastAPI(title="Bubble Data API Host", version="1.0.0")


@app.get("/health")
def health() -> Dict[str, Any]:
    base_url = _require_env("BUBBLE_DATA_URL")
    return {"status": "ok", "base_url": base_url}


@app.get("/things/{thing_type}")
def list_things(
    thing_type: str,
    limit: int = Query(default=100, gt=0, le=100),
    cursor: int = Query(default=0, ge=0),
    fetch_all: bool = Query(default=False),
    constraints: Optional[str] = Query(default=None, description="JSON array of constraint objects."),
) -> Dict[str, Any]:
    parsed = _parse_constraints(constraints)
    client = _bubble_client()
    try:
        page = client.list_things(thing_type, parsed, limit=limit, cursor=cursor, fetch_all=fetch_all)
        return page.to_dict()
    except Exception as exc:
        raise _translate_error(exc) from exc


@app.post("/things/{thing_type}")
def create_thing(thing_type: str, payload: ThingPayload) -> Dict[str, Any]:
    client = _bubble_client()
    try:
        return client.create_thing(thing_type, payload.data)
    except Exception as exc:
        raise _translate_error(exc) from exc


@app.post("/things/{thing_type}/bulk")
def create_bulk_things(thing_type: str, payload: BulkPayload) -> Dict[str, Any]:
    client = _bubble_client()
    try:
        results = client.create_bulk_things(thing_type, payload.things)
        return {"results": results, "count": len(results)}
    except Exception as exc:
        raise _translate_error(exc) from exc


@app.put("/things/{thing_type}/{thing_id}")
def update_thing(thing_type: str, thing_id: str, payload: ThingPayload) -> Dict[str, Any]:
    client = _bubble_client()
    try:
        return client.update_thing(thing_type, thing_id, payload.data)
    except Exception as exc:
        raise _translate_error(exc) from exc


@app.post("/demo/articles")
def create_demo_articles(count: int = Query(default=3, gt=0, le=100)) -> Dict[str, Any]:
    """Create ``count`` random articles, then return every article."""
    client = _bubble_client()
    try:
        if count == 1:
            created: Any = client.create_thing(DEMO_THING_TYPE, generate_random_articles(1)[0])
        else:
            created = client.create_bulk_things(DEMO_THING_TYPE, generate_random_articles(count))
        everything = client.list_things(DEMO_THING_TYPE, fetch_all=True)
        return {"res": created, "updatedResult": everything.results}
    except Exception as exc:
        raise _translate_error(exc) from exc


@app.get("/hello-world")
def hello_world() -> Dict[str, Any]:
    """List every article, update the first one, and return it re-read by ``_id``."""
    client = _bubble_client()
    try:
        articles = client.list_things(DEMO_THING_TYPE, fetch_all=True)
        if not articles.results:
            raise HTTPException(status_code=404, detail={"message": f"No {DEMO_THING_TYPE} things found"})
        first = articles.results[0]
        res = client.update_thing(
            DEMO_THING_TYPE,
            first["_id"],
            {"title": "Updated Title", "body": "Updated Body"},
        )
        id_constraints = ConstraintsBuilder().add_constraint("_id", ConstraintType.EQUALS, first["_id"]).build()
        updated = client.list_things(DEMO_THING_TYPE, id_constraints, fetch_all=True)
        logger.info("Updated %s %s", DEMO_THING_TYPE, first["_id"])
        return {**res, "updatedThing": updated.to_dict()}
    except HTTPException:
        raise
    except Exception as exc:
        raise _translate_error(exc) from exc
