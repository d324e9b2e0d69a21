"""
esgateway App: HTTP Routes
==========================

FastAPI application exposing the gateway:

    POST /doc             insert {index, id, doc}, refreshed before 200
    GET  /docs?index=N    match-all over one index
    GET  /alldocs         match-all over every index
    GET  /ping            liveness, never touches Elasticsearch

Errors are reported by status code only: 400 for a malformed insert body,
405 for a wrong method, 500 for anything Elasticsearch related.

Run with ``esgateway serve`` or
``uvicorn esgateway.app:create_app_from_env --factory``.
"""

import json
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings
from .core import DocumentStore
from .exceptions import BackendError
from .log import configure_logging
from .middleware import CORSMiddleware, LoggingMiddleware
from .models import InsertRequest

logger = structlog.get_logger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"non-JSON constant {name}")


def parse_insert_body(raw: bytes) -> InsertRequest:
    """
    Decode a ``POST /doc`` body.

    Raises:
        ValueError: on invalid JSON (NaN and Infinity included), nesting too
            deep to decode, or a payload that is not an insert request
    """
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nested too deeply") from e
    return InsertRequest.model_validate(data)


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


async def backend_error_handler(request: Request, exc: BackendError) -> Response:
    logger.warning(
        "Backend error",
        path=request.url.path,
        index=exc.index,
        error=str(exc),
    )
    return Response(status_code=500)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return Response(status_code=exc.status_code, headers=exc.headers)


def create_app(store: DocumentStore) -> FastAPI:
    """
    Build the gateway application around an existing store.

    Args:
        store: Document store shared by all requests

    Returns:
        FastAPI application; closes the store on shutdown
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Gateway started")
        yield
        logger.info("Shutting down gateway")
        store.close()

    app = FastAPI(
        title="esgateway",
        description="HTTP gateway for Elasticsearch documents",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store

    app.add_exception_handler(BackendError, backend_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Last added runs first: CORS wraps logging so preflights are not logged.
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CORSMiddleware)

    @app.post("/doc")
    async def insert_document(
        request: Request,
        store: DocumentStore = Depends(get_store),
    ) -> Response:
        raw = await request.body()
        try:
            payload = parse_insert_body(raw)
        except ValueError as e:
            logger.info("Rejected insert body", error=str(e))
            return Response(status_code=400)

        await run_in_threadpool(store.insert, payload.index, payload.id, payload.doc)
        return Response(status_code=200)

    @app.get("/docs")
    def query_index(
        index: str = Query(""),
        store: DocumentStore = Depends(get_store),
    ) -> JSONResponse:
        return JSONResponse(store.search(index).to_payload())

    @app.get("/alldocs")
    def query_all(store: DocumentStore = Depends(get_store)) -> JSONResponse:
        return JSONResponse(store.search_all().to_payload())

    @app.get("/ping")
    def ping() -> PlainTextResponse:
        return PlainTextResponse("pong")

    return app


def create_app_from_env() -> FastAPI:
    """Application factory for ``uvicorn --factory``."""
    settings = Settings()
    configure_logging(settings.log_level, settings.log_format)
    return create_app(DocumentStore.from_settings(settings))
