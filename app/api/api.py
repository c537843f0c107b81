from fastapi import APIRouter

from app.api.endpoints import ping

api_router = APIRouter()

# Include all API endpoint routers
api_router.include_router(ping.router, tags=["health"])
