# main.py
from __future__ import annotations

import json
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from pymongo.errors import PyMongoError
from starlette.middleware.sessions import SessionMiddleware

# Import logging utilities early so that the logger configuration is
# applied before any other modules emit log messages.
from gridsheets.logging_config import logger

from gridsheets.clients.mongo_client import DocumentStore
from gridsheets.core.auth import build_auth_strategy
from gridsheets.core.config import Settings, get_settings
from gridsheets.core.context import ActiveSheetSelector
from gridsheets.core.errors import ApiError, api_error_handler
from gridsheets.routes.auth import router as auth_router
from gridsheets.routes.protected import router as protected_router
from gridsheets.routes.sheets import router as sheets_router
from gridsheets.routes.tables import router as tables_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: DocumentStore = app.state.store
    if app.state.settings.mongo_connect_mode == "eager":
        try:
            store.connect(ping=True)
        except PyMongoError as e:
            logger.critical(json.dumps({
                "event": "store_unavailable",
                "detail": str(e),
            }), exc_info=True)
            raise
    try:
        yield
    finally:
        store.close()


def create_app(settings: Optional[Settings] = None, store: Optional[DocumentStore] = None) -> FastAPI:
    settings = settings or get_settings()
    for name in settings.default_secrets_in_use():
        logger.warning(json.dumps({
            "event": "default_secret_in_use",
            "setting": name,
            "detail": "set APP_" + name.upper() + " before deploying",
        }))
    app = FastAPI(title="gridsheets", default_response_class=ORJSONResponse, lifespan=lifespan)

    # shared state used by route dependencies
    app.state.settings = settings
    app.state.store = store or DocumentStore(settings)
    app.state.selector = ActiveSheetSelector(settings.default_collection)
    app.state.auth_strategy = build_auth_strategy(settings)

    app.add_exception_handler(ApiError, api_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.auth_strategy == "session":
        app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    # register routers
    for router in (sheets_router, tables_router, auth_router, protected_router):
        app.include_router(router, prefix=settings.api_prefix)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Every request is logged with path, method, status and processing
    # time as a single JSON line.
    @app.middleware("http")  # type: ignore[misc]
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000
        logger.info(json.dumps({
            "event": "http_request",
            "path": request.url.path,
            "method": request.method,
            "status": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }))
        return response

    return app


app = create_app()
