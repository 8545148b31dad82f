"""
Routers mounted under ``settings.api_prefix``.
"""
from fastapi import APIRouter

from jobly.api.routes import companies, health, jobs

api_router = APIRouter()
for module in (health, companies, jobs):
    api_router.include_router(module.router)

__all__ = ["api_router"]
