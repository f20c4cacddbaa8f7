#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""clipboard_store/api.py
FastAPI façade over a single ValueStore.

GET  /?id=<id>                 -> 200 {"id", "value"} | 400 | 404 {"message": "Clipboard not found"}
POST /?id=<id>&value=<value>   -> 200 {"message", "id", "value"} | 400 {"message": "Sorry something went wrong"}
any other method on /          -> 405, Allow: GET, POST
GET  /healthz                  -> {"ok": true, "entries": <n>}

Parameters travel in the query string for both methods. An empty value (`?id=`)
counts as missing.
"""

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from clipboard_store.config import Settings, get_settings
from clipboard_store.logs import setup_logging
from clipboard_store.store import ValueStore

logger = structlog.get_logger(__name__)

ALLOW = "GET, POST"

router = APIRouter()


def _message(status_code: int, message: str, **headers: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers or None)


def get_store(request: Request) -> ValueStore:
    return request.app.state.store


@router.get("/")
def read_clip(clip_id: Optional[str] = Query(None, alias="id"), store: ValueStore = Depends(get_store)):
    if not clip_id:
        return _message(400, "missing ?id parameter")
    value = store.get(clip_id)
    if value is None:
        logger.debug("clip_not_found", id=clip_id)
        return _message(404, "Clipboard not found")
    return {"id": clip_id, "value": value}


@router.post("/")
def record_clip(
    clip_id: Optional[str] = Query(None, alias="id"),
    value: Optional[str] = None,
    store: ValueStore = Depends(get_store),
):
    if not clip_id or not value:
        return _message(400, "Sorry something went wrong")
    store.set(clip_id, value)
    logger.debug("clip_recorded", id=clip_id)
    return {"message": "Clip board recorded successfully", "id": clip_id, "value": value}


async def method_not_allowed(request: Request, exc: StarletteHTTPException):
    # routing raises 405 for any method the routes on a path do not declare
    if exc.status_code == 405 and request.url.path == "/":
        return _message(405, "method not allowed", Allow=ALLOW)
    return await http_exception_handler(request, exc)


@router.get("/healthz")
def healthz(store: ValueStore = Depends(get_store)):
    return {"ok": True, "entries": len(store)}


def create_app(store: Optional[ValueStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the app around `store`.

    An injected store belongs to the caller and is left running on shutdown.
    Without one, a store is built from `settings` at startup and closed at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "store", None) is None:
            cfg = settings or get_settings()
            setup_logging(cfg.log_level, cfg.log_json)
            owned = ValueStore(ttl=cfg.ttl_seconds, sweep_interval=cfg.sweep_interval_seconds)
            app.state.store = owned
        try:
            yield
        finally:
            if owned is not None:
                owned.close()
                app.state.store = None

    app = FastAPI(title="Clipboard", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.include_router(router)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed)
    return app
