from fastapi import APIRouter

from app.api.v1.endpoints import health, test_sessions


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(test_sessions.router)
