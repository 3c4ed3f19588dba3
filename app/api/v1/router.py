from fastapi import APIRouter

from app.api.v1.endpoints import archives, planning, regions, zones

api_router = APIRouter()

api_router.include_router(planning.router)
api_router.include_router(zones.router)
api_router.include_router(archives.router)
api_router.include_router(regions.router)
