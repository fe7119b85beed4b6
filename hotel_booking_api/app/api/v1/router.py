"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified
prefix.  When new domains are introduced, update this file to include
their routers.
"""

from fastapi import APIRouter

from .endpoints import health, my_hotels

router = APIRouter()

router.include_router(my_hotels.router, prefix="/my-hotels", tags=["my-hotels"])
router.include_router(health.router, prefix="/health", tags=["health"])
