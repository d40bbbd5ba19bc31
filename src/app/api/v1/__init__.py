"""API version 1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, categories, customers, summary

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(auth.router)
router.include_router(customers.router)
router.include_router(summary.router)
router.include_router(categories.router)
