# scootershop/api/v1/api.py
from fastapi import APIRouter, Depends

from scootershop.api.deps import require_admin
from scootershop.api.v1.routes import (
    auth,
    customers,
    dashboard,
    notifications,
    products,
    receivables,
    reports,
    services,
    targets,
    transactions,
)

api_router = APIRouter()

# Login/logout stay reachable without a session
api_router.include_router(auth.router)

protected = [Depends(require_admin)]
api_router.include_router(targets.router, dependencies=protected)
api_router.include_router(transactions.router, dependencies=protected)
api_router.include_router(services.router, dependencies=protected)
api_router.include_router(customers.router, dependencies=protected)
api_router.include_router(products.router, dependencies=protected)
api_router.include_router(receivables.router, dependencies=protected)
api_router.include_router(dashboard.router, dependencies=protected)
api_router.include_router(reports.router, dependencies=protected)
api_router.include_router(notifications.router, dependencies=protected)
