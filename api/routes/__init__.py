"""
Routes Package
Aggregate all route routers
"""
from fastapi import APIRouter

# Import all routers
from .health import router as health_router
from .breakdown import router as breakdown_router

# Create main router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(breakdown_router)
