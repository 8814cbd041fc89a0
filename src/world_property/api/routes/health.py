"""
Health check API route
"""

from fastapi import APIRouter, HTTPException, Request

from world_property.config.settings import ENV, LEGAL_WORKFLOW_VERSION
from world_property.utils.helpers import utcnow

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check

    Reports the storage backend; with PostgreSQL configured a failed
    connectivity check turns into a 503.
    """
    database = getattr(request.app.state, "database", None)

    response = {
        "status": "healthy",
        "timestamp": utcnow().isoformat(),
        "environment": ENV,
        "storage": "memory",
        "legal_workflow_version": LEGAL_WORKFLOW_VERSION,
    }

    if database is not None:
        try:
            await database.ping()
        except Exception as e:
            raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")
        response["storage"] = "postgres"
        response["database"] = "connected"

    return response
