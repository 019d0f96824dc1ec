"""
Top‑level router.

Aggregates the endpoint routers under their path prefixes.  The router
is mounted at the application root, so model routes are served at
``/model`` exactly.
"""

from fastapi import APIRouter

from .endpoints import health, models

router = APIRouter()

router.include_router(models.router, prefix="/model", tags=["models"])
router.include_router(health.router, prefix="/health", tags=["health"])
