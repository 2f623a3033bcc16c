"""API v1 router aggregation."""

from fastapi import APIRouter

from wodtracker.api.v1.endpoints import catalog, goals, health, management, records, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(catalog.router, tags=["catalog"])
api_router.include_router(workouts.router, prefix="/entrenamientos", tags=["workouts"])
api_router.include_router(goals.router, prefix="/objetivos", tags=["goals"])
api_router.include_router(records.router, prefix="/records", tags=["records"])
api_router.include_router(management.router, prefix="/management", tags=["management"])
