"""Health check endpoints for GroupHub.

- /health: Basic health check
- /health/ready: Readiness probe (is the database reachable?)
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import grouphub
from grouphub.api.deps import get_db
from grouphub.core.logger import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity."""
    try:
        db.execute(text("SELECT 1")).fetchone()
        return {"status": "healthy"}
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return {
            "status": "unhealthy",
            "error": type(e).__name__,
        }


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": grouphub.__version__,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/health/ready")
async def readiness(db: Session = Depends(get_db)):
    checks = {"database": check_database(db)}
    healthy = all(c["status"] == "healthy" for c in checks.values())
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ready" if healthy else "not_ready", "checks": checks},
    )
