"""
Health endpoint for API v1.

Used by load balancers and the owner console to check that the API
is reachable.  It does not require authentication and touches neither
the database nor the media host.
"""

from typing import Dict

from fastapi import APIRouter

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    return {"status": "ok"}
