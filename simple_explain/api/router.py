from fastapi import APIRouter

from simple_explain.api.endpoints import generate, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(generate.router, prefix="/generate", tags=["Generate"])
