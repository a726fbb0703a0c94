"""API route aggregation.

All routers registered here get mounted in main.py. Authentication is
applied per handler: some user routes and every read on employees and
checks are open to anonymous callers, so there is no router-wide
auth dependency.
"""

from fastapi import APIRouter

from pointage.api.employees import router as employees_router
from pointage.api.health import router as health_router
from pointage.api.users import router as users_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(employees_router, tags=["employees", "checks"])
