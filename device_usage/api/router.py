from fastapi import APIRouter

from device_usage.api.routes import external, health, report, usage

api_router = APIRouter(prefix="/api")
api_router.include_router(usage.router, tags=["device-usage"])
api_router.include_router(report.router, tags=["report"])
api_router.include_router(external.router, tags=["external"])
api_router.include_router(health.router)
