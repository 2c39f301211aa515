# src/products_api/api/v1/router.py
from fastapi import APIRouter

from products_api.api.v1 import info, products

api_router = APIRouter()
api_router.include_router(info.router)
api_router.include_router(products.router)
