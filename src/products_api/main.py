# src/products_api/main.py
import logging
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from products_api.api.v1.router import api_router
from products_api.core.config import get_settings
from products_api.core.logging_config import setup_logging
from products_api.core.metrics import REQUEST_COUNT
from products_api.core.rate_limit import limiter
from products_api.domain.errors import ProductApiError

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = uuid.uuid4().hex[:10]
        request.state.request_id = request_id
        logger.info(
            "%s %s - User-Agent: %s - Request ID: %s",
            request.method,
            request.url.path,
            request.headers.get("user-agent", "Unknown"),
            request_id,
        )
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        REQUEST_COUNT.labels(
            method=request.method,
            path=request.url.path,
            status_code=str(response.status_code),
        ).inc()
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        "%s %s starting (environment: %s, API prefix: %s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
        settings.api_prefix,
    )
    yield
    logger.info("%s shutting down", settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Error responses
# ---------------------------------------------------------------------------


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    details: list[str] | None = None,
    resource: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "error": message,
        "statusCode": status_code,
        "timestamp": datetime.now(UTC).isoformat(),
        "requestId": getattr(request.state, "request_id", None),
    }
    if details:
        body["details"] = details
    if resource:
        body["resource"] = resource
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def product_api_error_handler(request: Request, exc: ProductApiError) -> JSONResponse:
    logger.warning(
        "Error in request %s: %s",
        getattr(request.state, "request_id", None),
        exc.message,
    )
    return _error_response(
        request, exc.status_code, exc.message, details=exc.details, resource=exc.resource
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query"))
        details.append(f"{field}: {error['msg']}" if field else error["msg"])
    return await product_api_error_handler(
        request, ProductApiError.validation("Validation failed", details)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unmatched method on a known path is reported like an unknown route.
    if exc.status_code in (404, 405) and exc.detail in ("Not Found", "Method Not Allowed"):
        return _error_response(
            request,
            404,
            f"Route: Route {request.method} {request.url.path} not found",
            resource="Route",
        )
    return _error_response(request, exc.status_code, str(exc.detail), headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in request %s", getattr(request.state, "request_id", None))
    if settings.is_production:
        message = "Something went wrong"
    else:
        message = str(exc) or "Internal Server Error"
    return _error_response(request, 500, message)


app.add_exception_handler(ProductApiError, product_api_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

# Rate Limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

# Metrics Middleware
app.add_middleware(MetricsMiddleware)

# Request ID + access log
app.add_middleware(RequestContextMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key"],
)

app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/", tags=["Info"])
async def root() -> dict[str, Any]:
    return {
        "message": f"Hello World! Welcome to the {settings.app_name}",
        "version": settings.app_version,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.environment,
        "endpoints": {
            "api": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": f"{settings.api_prefix}/docs",
            "products": f"{settings.api_prefix}/products",
        },
    }


@app.get("/healthz", tags=["Health"])
async def health_check() -> dict[str, str]:
    return {"status": "ok", "version": settings.app_version}


@app.get("/readyz", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    return {"status": "ready"}


@app.get("/metrics", tags=["Monitoring"])
async def metrics_endpoint() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
