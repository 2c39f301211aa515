import time
from datetime import UTC, datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request

from products_api.core.config import Settings, get_settings

router = APIRouter(tags=["Info"])

SettingsDep = Annotated[Settings, Depends(get_settings)]

_STARTED_AT = time.monotonic()


@router.get("/")
async def api_root(settings: SettingsDep) -> dict[str, Any]:
    prefix = settings.api_prefix
    return {
        "message": f"Hello World! Welcome to the {settings.app_name}",
        "version": settings.app_version,
        "timestamp": datetime.now(UTC).isoformat(),
        "endpoints": {
            "products": f"{prefix}/products",
            "search": f"{prefix}/products/search",
            "statistics": f"{prefix}/products/statistics",
            "documentation": f"{prefix}/docs",
        },
    }


@router.get("/health")
async def api_health(settings: SettingsDep) -> dict[str, Any]:
    return {
        "status": "OK",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "environment": settings.environment,
    }


@router.get("/docs")
async def api_docs(request: Request, settings: SettingsDep) -> dict[str, Any]:
    """
    Compact endpoint overview, complementing the OpenAPI docs at /docs.
    """
    return {
        "title": f"{settings.app_name} Documentation",
        "version": settings.app_version,
        "description": "REST API for product management with filtering, search and statistics",
        "baseUrl": f"{str(request.base_url).rstrip('/')}{settings.api_prefix}",
        "endpoints": {
            "GET /": "API information and available endpoints",
            "GET /health": "Health check endpoint",
            "GET /products": "List all products with filtering, pagination, and sorting",
            "GET /products/search": "Search products by name or description",
            "GET /products/statistics": "Get product statistics and analytics",
            "GET /products/{id}": "Get a specific product by ID",
            "POST /products": "Create a new product (requires authentication)",
            "PUT /products/{id}": "Update an existing product (requires authentication)",
            "DELETE /products/{id}": "Delete a product (requires authentication)",
        },
        "authentication": {
            "method": "API Key",
            "header": "X-API-Key",
            "description": "Send the key in X-API-Key or as 'Authorization: Bearer <key>'",
        },
        "queryParameters": {
            "filtering": {
                "category": "Filter by product category",
                "inStock": "Filter by stock status (true/false)",
                "minPrice": "Minimum price filter",
                "maxPrice": "Maximum price filter",
            },
            "pagination": {
                "page": "Page number (default: 1)",
                "limit": f"Items per page (default: {settings.default_page_size}, "
                f"max: {settings.max_page_size})",
            },
            "sorting": {
                "sortBy": "Field to sort by (default: name)",
                "sortOrder": "Sort order: asc or desc (default: asc)",
            },
            "search": {"q": "Search query for name or description"},
        },
    }
