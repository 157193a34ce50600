from fastapi import APIRouter

from simple_explain.config import settings
from simple_explain.schemas.health import HealthCheck

router = APIRouter()


@router.get("", response_model=HealthCheck)
async def health_check() -> HealthCheck:
    """
    Health check endpoint that also reports whether generation is configured.
    """
    return HealthCheck(status="healthy", llm_configured=settings.llm_configured)
