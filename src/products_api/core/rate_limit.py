from slowapi import Limiter
from slowapi.util import get_remote_address

from products_api.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def mutation_limit() -> str:
    return get_settings().rate_limit_mutations
