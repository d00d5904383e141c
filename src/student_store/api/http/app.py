"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from src.student_store.api.http.app_data import ApplicationDependencies
from src.student_store.api.http.routers import health, products, site, students
from src.student_store.api.utils.app_startup import configure_logging
from src.student_store.core.exceptions import InputValidationError, StudentStoreError
from src.student_store.runtime.config.config_data import ConfigData
from src.student_store.runtime.context import get_config

configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, environment: str = "development"):
        super().__init__(app)
        self._environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if self._environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    # Correlation / tracing
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={
                    "message": "Internal Server Error",
                    "error": "internal_error",
                    "request_id": request_id,
                },
                headers={"X-Request-ID": request_id},
            )


# --- Exception handlers ---
async def handle_service_error(request: Request, exc: StudentStoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.bind(error_type=type(exc).__name__).error("request.store_error")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    detail = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return await handle_service_error(request, InputValidationError(detail=detail))


# Routing errors raised by Starlette (unknown path, wrong method)
_HTTP_ERRORS = {
    404: ("Page not found", "not_found"),
    405: ("Method not allowed", "method_not_allowed"),
}


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message, code = _HTTP_ERRORS.get(exc.status_code, (str(exc.detail), "http_error"))
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message, "error": code},
        headers=exc.headers,
    )


def create_app(
    dependencies: ApplicationDependencies | None = None,
    config: ConfigData | None = None,
) -> FastAPI:
    """Build the application with one composed route table.

    Args:
        dependencies: Pre-built store client and hasher; built from config on
            startup when omitted
        config: Configuration to use instead of the current context's
    """
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "app_dependencies", None) is None
        if owned:
            app.state.app_dependencies = ApplicationDependencies.from_config(config)
        deps: ApplicationDependencies = app.state.app_dependencies

        logger.info("Starting up application in {} environment", config.app.environment)
        if config.database.create_tables:
            deps.database_service.create_all()
        try:
            yield
        finally:
            logger.info("Shutting down application")
            if owned:
                deps.database_service.dispose()
                app.state.app_dependencies = None

    production = config.app.environment == "production"
    app = FastAPI(
        title="Student Store API",
        lifespan=lifespan,
        docs_url=None if production else "/docs",
        redoc_url=None if production else "/redoc",
    )
    if dependencies is not None:
        app.state.app_dependencies = dependencies

    # --- CORS configuration ---
    if production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(SecurityHeadersMiddleware, environment=config.app.environment)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(StudentStoreError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)

    # --- Router registration ---
    app.include_router(site.router)
    app.include_router(health.router)
    app.include_router(students.router)
    app.include_router(products.router)

    return app


app = create_app()

__all__ = ["app", "create_app"]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # Access logging is handled in middleware
    )
