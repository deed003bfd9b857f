"""
API routers for the application.
"""

from fastapi import APIRouter
from portal.routers import design_requests, lsm_requests, price_changes, store_hours_changes, pages

api_router = APIRouter()

# Include routers
api_router.include_router(design_requests.router)  # Marketing design requests
api_router.include_router(lsm_requests.router)  # LSM / custom design requests
api_router.include_router(price_changes.router)  # Price change requests
api_router.include_router(store_hours_changes.router)  # Store hours change requests

__all__ = ["api_router", "design_requests", "lsm_requests", "price_changes", "store_hours_changes", "pages"]
