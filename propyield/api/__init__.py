"""
API routes for the investment engine.
"""

from fastapi import APIRouter

from propyield.api import calculations

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
