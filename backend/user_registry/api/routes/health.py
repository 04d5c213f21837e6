"""Health Probe: liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - Reports the registry size when the registry is initialized; never calls the generator
"""

import logging
from fastapi import APIRouter, status

from user_registry.services import registry as registry_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    registry = registry_module.registry
    return {
        "status": "healthy",
        "service": "user-registry-api",
        "version": "1.0.0",
        "users": len(registry) if registry is not None else None,
    }
