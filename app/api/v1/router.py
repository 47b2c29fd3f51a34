"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    companies,
    products,
    quotations,
    orders,
    exhibitions,
    employees,
    tasks,
    notes,
    settings,
    dashboard,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)

api_router.include_router(
    companies.router,
    prefix="/companies",
    tags=["Companies"],
)

api_router.include_router(
    products.router,
    prefix="/products",
    tags=["Products"],
)

api_router.include_router(
    quotations.router,
    prefix="/quotations",
    tags=["Quotations"],
)

api_router.include_router(
    orders.router,
    prefix="/orders",
    tags=["Orders"],
)

api_router.include_router(
    exhibitions.router,
    prefix="/exhibitions",
    tags=["Exhibitions"],
)

api_router.include_router(
    employees.router,
    prefix="/employees",
    tags=["Employees"],
)

api_router.include_router(
    tasks.router,
    prefix="/tasks",
    tags=["Tasks"],
)

api_router.include_router(
    notes.router,
    prefix="/notes",
    tags=["Notes"],
)

api_router.include_router(
    notes.documents_router,
    prefix="/documents",
    tags=["Documents"],
)

api_router.include_router(
    settings.router,
    prefix="/settings",
    tags=["Settings"],
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["Dashboard"],
)
