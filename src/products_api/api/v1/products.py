from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Security, status

from products_api.api.dependencies import get_product_service
from products_api.core.config import Settings, get_settings
from products_api.core.rate_limit import limiter, mutation_limit
from products_api.core.security import get_api_user
from products_api.domain.models import (
    Product,
    ProductCreate,
    ProductListResponse,
    ProductMutationResponse,
    ProductQuery,
    ProductSearchQuery,
    ProductSearchResponse,
    ProductStatistics,
    ProductUpdate,
)
from products_api.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

ApiUserDep = Annotated[str, Security(get_api_user)]
ServiceDep = Annotated[ProductService, Depends(get_product_service)]
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Query parameters arrive as raw strings; lenient parsing happens in the query models.
RawParam = Annotated[str | None, Query()]


@router.get("", response_model=ProductListResponse)
async def list_products(
    service: ServiceDep,
    settings: SettingsDep,
    category: RawParam = None,
    in_stock: Annotated[str | None, Query(alias="inStock")] = None,
    min_price: Annotated[str | None, Query(alias="minPrice")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice")] = None,
    page: RawParam = None,
    limit: RawParam = None,
    sort_by: Annotated[str | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[str | None, Query(alias="sortOrder")] = None,
) -> ProductListResponse:
    """
    Lists products with filtering, sorting and pagination.
    """
    query = ProductQuery.from_params(
        category=category,
        in_stock=in_stock,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    return service.list_products(query)


@router.get("/search", response_model=ProductSearchResponse)
async def search_products(
    service: ServiceDep,
    settings: SettingsDep,
    q: RawParam = None,
    category: RawParam = None,
    in_stock: Annotated[str | None, Query(alias="inStock")] = None,
    page: RawParam = None,
    limit: RawParam = None,
) -> ProductSearchResponse:
    """
    Searches name and description, case-insensitively.
    """
    query = ProductSearchQuery.from_params(
        q=q,
        category=category,
        in_stock=in_stock,
        page=page,
        limit=limit,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    return service.search_products(query)


@router.get("/statistics", response_model=ProductStatistics)
async def get_statistics(service: ServiceDep) -> ProductStatistics:
    return service.get_statistics()


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, service: ServiceDep) -> Product:
    return service.get_product(product_id)


@router.post("", response_model=ProductMutationResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(mutation_limit)
async def create_product(
    request: Request,
    payload: ProductCreate,
    user: ApiUserDep,
    service: ServiceDep,
) -> ProductMutationResponse:
    product = service.create_product(payload)
    return ProductMutationResponse(message="Product created successfully", product=product)


@router.put("/{product_id}", response_model=ProductMutationResponse)
@limiter.limit(mutation_limit)
async def update_product(
    request: Request,
    product_id: str,
    payload: ProductUpdate,
    user: ApiUserDep,
    service: ServiceDep,
) -> ProductMutationResponse:
    """
    Partial update: only fields present in the body are changed.
    """
    product = service.update_product(product_id, payload)
    return ProductMutationResponse(message="Product updated successfully", product=product)


@router.delete("/{product_id}", response_model=ProductMutationResponse)
@limiter.limit(mutation_limit)
async def delete_product(
    request: Request,
    product_id: str,
    user: ApiUserDep,
    service: ServiceDep,
) -> ProductMutationResponse:
    product = service.delete_product(product_id)
    return ProductMutationResponse(message="Product deleted successfully", product=product)
