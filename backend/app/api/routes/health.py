"""
Health check API routes.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_app_settings, get_provider_selector
from app.core.config import Settings
from app.core.constants import HTTPStatus
from app.db import check_connection
from app.services.llm import ProviderSelector

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_app_settings)):
    """Basic health check endpoint."""
    return {"status": "healthy", "version": settings.app_version}


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check for container orchestration.

    Returns 200 only if the database answers.
    """
    if await check_connection():
        return {"ready": True}

    return JSONResponse(
        status_code=HTTPStatus.SERVICE_UNAVAILABLE,
        content={"ready": False, "error": "Database unavailable"}
    )


@router.get("/health/detailed")
async def detailed_health_check(
    settings: Settings = Depends(get_app_settings),
    providers: ProviderSelector = Depends(get_provider_selector),
):
    """Health with dependency status and the configured models."""
    database_ok = await check_connection()

    return {
        "status": "healthy" if database_ok else "degraded",
        "version": settings.app_version,
        "services": {
            "database": {"status": "healthy" if database_ok else "unhealthy"},
            "llm": {
                "test_mode": providers.test_mode,
                "language_models": {
                    name: providers.language_model(name).qualified_name
                    for name in providers.language_model_names
                },
            },
        },
    }
