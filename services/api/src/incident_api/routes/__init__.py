"""Router aggregation."""

from fastapi import APIRouter

from services.api.src.incident_api.routes.incidents import router as incidents_router

api_router = APIRouter()
api_router.include_router(incidents_router, prefix="/api/incidents", tags=["incidents"])
