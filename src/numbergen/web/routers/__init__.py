from numbergen.web.routers.metadata import router as metadata_router
from numbergen.web.routers.settings import router as settings_router
from numbergen.web.routers.tenants import router as tenants_router

__all__ = [
    "metadata_router",
    "settings_router",
    "tenants_router",
]
