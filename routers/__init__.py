# routers/__init__.py
from .owners import router as owners_router
from .properties import router as properties_router
from .tenants import router as tenants_router
from .leases import router as leases_router
from .payments import router as payments_router
from .dashboard import router as dashboard_router
from .webhooks import router as webhooks_router

all_routers = [
     owners_router,
     properties_router,
     tenants_router,
     leases_router,
     payments_router,
     dashboard_router,
     webhooks_router,
]

__all__ = [
     "owners_router",
     "properties_router",
     "tenants_router",
     "leases_router",
     "payments_router",
     "dashboard_router",
     "webhooks_router",
     "all_routers",
]
