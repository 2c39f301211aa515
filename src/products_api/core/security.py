# src/products_api/core/security.py
import logging

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from products_api.core.config import Settings, get_settings
from products_api.domain.errors import ProductApiError

logger = logging.getLogger(__name__)

_API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)
_BEARER = HTTPBearer(auto_error=False)


async def get_api_user(
    api_key: str | None = Security(_API_KEY_HEADER),
    bearer: HTTPAuthorizationCredentials | None = Security(_BEARER),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    FastAPI Dependency: validates the API key and returns the user label.
    The key is read from X-API-Key, falling back to "Authorization: Bearer <key>".
    Raises an authentication error (HTTP 401) for missing or unknown keys.
    """
    key = api_key or (bearer.credentials if bearer else None)
    if not key:
        raise ProductApiError.authentication(
            "API key is required in X-API-Key header or Authorization header"
        )

    user = settings.api_keys.get(key)
    if user is None:
        raise ProductApiError.authentication("Invalid API key")

    logger.info("Authenticated user: %s", user)
    return user
