from fastapi import APIRouter

from brandmotion.api.export import router as export_router
from brandmotion.api.jobs import router as jobs_router
from brandmotion.api.preview import router as preview_router
from brandmotion.api.templates import router as templates_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(templates_router, prefix="/api", tags=["templates"])
api_router.include_router(preview_router, prefix="/api", tags=["preview"])
api_router.include_router(export_router, prefix="/api", tags=["export"])
api_router.include_router(jobs_router, prefix="/api", tags=["jobs"])
