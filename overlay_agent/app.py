import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import time
import traceback
from uuid import uuid4
from overlay_agent.config import (
    HOST,
    PORT,
    APP_VERSION,
    DEFAULT_CHANNEL,
    MAX_COMMAND_CHARS,
    get_cors_origins,
)
from overlay_agent.core.logging import get_logger, set_request_id, reset_request_id, get_request_id
from overlay_agent.core.errors import OverlayAgentError
from overlay_agent.core.utils import LazyMap
from overlay_agent.api import parse_router, status_router
_log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle handler for application startup and shutdown."""
    env = os.getenv("ENV", "dev")
    _log.info(
        "APP starting",
        version=APP_VERSION,
        env=env,
        pid=os.getpid(),
        channel=DEFAULT_CHANNEL,
        max_chars=MAX_COMMAND_CHARS,
    )
    _log.info("APP ready", host=HOST, port=PORT)

    yield

    LazyMap.reset_all()
    _log.info("APP shutdown complete")

app = FastAPI(title="overlay-agent API", version=APP_VERSION, lifespan=lifespan)

@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    req_id = (
        request.headers.get("X-Request-ID")
        or request.headers.get("X-Request-Id")
        or uuid4().hex[:12]
    )
    request.state.request_id = req_id
    token = set_request_id(req_id)
    t0 = time.perf_counter()
    try:
        response = await call_next(request)
    finally:
        reset_request_id(token)
        elapsed = time.perf_counter() - t0
        _log.debug("APP request", path=str(request.url.path), ms=round(elapsed * 1000, 2))
    response.headers["X-Request-ID"] = req_id
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
_log.debug("APP middleware setup", middlewares=["request_id", "cors"])

app.include_router(status_router)
app.include_router(parse_router)
_log.debug("APP routers mounted", routers=["status", "parse"])


def _request_id(request: Request):
    return getattr(request.state, "request_id", None) or get_request_id()


@app.exception_handler(OverlayAgentError)
async def app_error_handler(request: Request, exc: OverlayAgentError):
    """Render typed application errors as structured JSON."""
    req_id = _request_id(request)
    if exc.request_id is None:
        exc.request_id = req_id

    _log.warning(
        "APP request rejected",
        path=str(request.url.path),
        error_type=type(exc).__name__,
        error=exc.message,
        request_id=req_id,
    )

    headers = {"X-Request-ID": req_id} if req_id else None
    content = {
        "error": type(exc).__name__,
        "code": exc.code,
        "message": exc.message,
        "is_retryable": exc.is_retryable,
        "path": str(request.url.path),
        "request_id": req_id,
    }
    field = getattr(exc, "field", None)
    if field:
        content["field"] = field
    return JSONResponse(status_code=exc.http_status, headers=headers, content=content)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    req_id = _request_id(request)

    tb = traceback.format_exc()
    _log.error(
        "APP unhandled exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
        error=str(exc),
        traceback=tb,
        request_id=req_id
    )

    headers = {"X-Request-ID": req_id} if req_id else None
    return JSONResponse(
        status_code=500,
        headers=headers,
        content={
            "error": "Internal Server Error",
            "message": str(exc) if str(exc) else "Unknown error",
            "type": type(exc).__name__,
            "path": str(request.url.path),
            "request_id": req_id,
        }
    )

if __name__ == "__main__":
    import logging

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    uvicorn.run(
        "overlay_agent.app:app",
        host=HOST,
        port=PORT,
        log_level="warning",
        reload=False,
    )
