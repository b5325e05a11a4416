from racevault.api.boost_names import router as boost_names_router
from racevault.api.catalog import router as catalog_router
from racevault.api.content_cache import router as content_cache_router
from racevault.api.health import router as health_router
from racevault.api.user_assets import router as user_assets_router

__all__ = [
    "boost_names_router",
    "catalog_router",
    "content_cache_router",
    "health_router",
    "user_assets_router",
]
