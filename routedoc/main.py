"""
Routedoc — FastAPI Application Factory
========================================

What:  Serves a composed route tree over HTTP and publishes its document.
How:   create_app() builds the route tree, aggregates its ApiDocument and
       creates the Dispatcher before the app object exists. Every request then
       goes through one catch-all endpoint that reads the body, builds a
       RequestContext and dispatches it.
Who:   Started by uvicorn (`uvicorn routedoc.main:app` or `routedoc serve`).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → CORS         │
    │                                                     │
    │  Routes:                                            │
    │    GET /openapi.json   aggregated ApiDocument       │
    │    GET /docs           viewer page (local file)     │
    │    *   /{path}         Dispatcher(route tree)       │
    │                                                     │
    │  Exception Handlers:                                │
    │    ClientInputError→400 │ RouteNotFound→404 │       │
    │    MethodNotAllowed→405 │ Exception→500             │
    └─────────────────────────────────────────────────────┘

FastAPI's own OpenAPI generation is switched off: the document comes from the
route declarations, not from FastAPI's routing table.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from routedoc import __version__
from routedoc.config import Settings, settings
from routedoc.core import ApiDocument, Dispatcher, Reply, RequestContext, Route, aggregate
from routedoc.core.reply import JSON
from routedoc.exceptions import ClientInputError, RouteDocError
from routedoc.middleware.logging import RequestLoggingMiddleware
from routedoc.middleware.request_id import RequestIDMiddleware, request_id_var
from routedoc.routes import api
from routedoc.schemas.errors import ErrorResponse

logger = logging.getLogger(__name__)

DISPATCH_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]
OPENAPI_URL_PLACEHOLDER = "__OPENAPI_URL__"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once, before the route tree is built, so aggregation is logged.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Document and Reply Rendering
# ══════════════════════════════════════════════════════════════════════════

def build_document(root: Route, config: Settings = settings) -> ApiDocument:
    """Aggregate `root` with the configured title, version and description."""
    return aggregate(
        root,
        title=config.api_title,
        version=config.api_version,
        description=config.api_description,
    )


def render_reply(reply: Reply) -> Response:
    headers = dict(reply.headers)
    if reply.media_type == JSON:
        return JSONResponse(reply.body, status_code=reply.status_code, headers=headers)
    if isinstance(reply.body, str) and reply.media_type.startswith("text/plain"):
        return PlainTextResponse(reply.body, status_code=reply.status_code, headers=headers)
    return Response(
        content=reply.body,
        status_code=reply.status_code,
        headers=headers,
        media_type=reply.media_type,
    )


def load_docs_page(config: Settings = settings) -> str:
    page = config.docs_file.read_text(encoding="utf-8")
    return page.replace(OPENAPI_URL_PLACEHOLDER, config.openapi_path)


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(request: Request, exc: RouteDocError, details: Optional[dict]) -> JSONResponse:
    request.state.error_code = exc.error_code
    body = ErrorResponse(
        error=exc.error_code,
        message=exc.message,
        details=details,
        request_id=request_id_var.get("") or None,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the routedoc error taxonomy to HTTP responses.

    Handler hierarchy:
        ClientInputError  → 400 with details (which parameter, what was wrong)
        RouteDocError     → its status_code (404, 405) with method and path
        Exception         → 500, stack trace logged server-side only
    """

    @app.exception_handler(ClientInputError)
    async def handle_client_input(request: Request, exc: ClientInputError):
        logger.warning("[%s] Client input error: %s", request_id_var.get(""), exc.message)
        return _error_response(request, exc, exc.context)

    @app.exception_handler(RouteDocError)
    async def handle_route_error(request: Request, exc: RouteDocError):
        return _error_response(request, exc, exc.context or None)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, exc, exc_info=True)
        request.state.error_code = "internal_server_error"
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="internal_server_error",
                message="An unexpected error occurred.",
                request_id=rid or None,
            ).model_dump(),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(root: Optional[Route] = None, config: Settings = settings) -> FastAPI:
    """
    Create the application for a route tree (the Petstore API by default).

    The tree, its document and the dispatcher are fully built before the app
    is returned, and are read-only from then on. An inconsistent document
    raises AggregationInconsistencyError here and the app never starts.
    """
    setup_logging(config.log_level)

    tree = root if root is not None else api()
    document = build_document(tree, config)
    dispatcher = Dispatcher(tree)
    openapi = document.to_openapi()
    docs_page = load_docs_page(config) if config.serve_docs else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Routedoc %s serving %d operations", __version__, len(document.routes))
        if config.print_openapi_on_startup:
            sys.stdout.write(document.to_json() + "\n")
            sys.stdout.flush()
        if config.serve_docs:
            logger.info("API docs: http://%s:%d%s", config.host, config.port, config.docs_path)
        yield
        logger.info("Shutdown complete.")

    app = FastAPI(
        title=config.api_title,
        version=config.api_version,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.document = document
    app.state.dispatcher = dispatcher

    # ── Middleware (last added runs first) ────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Expires-After", "X-Rate-Limit"],
    )
    quiet = (config.openapi_path, config.docs_path) if config.serve_docs else ()
    app.add_middleware(RequestLoggingMiddleware, quiet_paths=quiet)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Document endpoints ────────────────────────────────────────────────
    if config.serve_docs:
        async def openapi_endpoint(request: Request) -> JSONResponse:
            return JSONResponse(openapi)

        async def docs_endpoint(request: Request) -> HTMLResponse:
            return HTMLResponse(docs_page)

        app.router.add_route(config.openapi_path, openapi_endpoint, methods=["GET"], include_in_schema=False)
        app.router.add_route(config.docs_path, docs_endpoint, methods=["GET"], include_in_schema=False)

    # ── Route tree ────────────────────────────────────────────────────────
    async def dispatch_endpoint(request: Request) -> Response:
        body = await request.body()
        ctx = RequestContext.build(
            method=request.method,
            path=request.url.path,
            query=request.query_params.multi_items(),
            headers=request.headers.items(),
            body=body,
        )
        return render_reply(dispatcher.dispatch(ctx))

    app.router.add_route("/{full_path:path}", dispatch_endpoint, methods=DISPATCH_METHODS, include_in_schema=False)

    return app


app = create_app()
