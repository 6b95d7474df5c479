"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects all routes in each router
without modifying individual handlers. Health and auth routers are
open (no auth required) — signup and login are how identity is
established in the first place.
"""

from fastapi import APIRouter, Depends

from warden.api.auth import router as auth_router
from warden.api.health import router as health_router
from warden.api.resources import router as resources_router
from warden.api.users import router as users_router
from warden.auth.dependencies import get_current_user

# All protected routers require authentication
_auth = [Depends(get_current_user)]

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid bearer token
api_router.include_router(users_router, tags=["users"], dependencies=_auth)
api_router.include_router(resources_router, tags=["resources"], dependencies=_auth)
