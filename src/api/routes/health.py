"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import ping

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Health check endpoint with dependency status."""
    client = getattr(request.app.state, "mongo_client", None)
    mongodb_ok = client is not None and ping(client)

    health_status = {
        "status": "healthy" if mongodb_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {
            "mongodb": {
                "status": "healthy" if mongodb_ok else "unhealthy",
                "message": "Connection successful" if mongodb_ok else "Connection failed or not configured",
            }
        },
    }

    status_code = status.HTTP_200_OK if mongodb_ok else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        content=health_status,
        status_code=status_code
    )
