from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from blogapi.api.deps import RepoDep
from blogapi.api.schemas import HealthOut
from blogapi.core.exceptions import StorageError
from blogapi.core.logger import logger
from blogapi.core.settings import settings

router = APIRouter()


# ------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------
@router.get("/health", response_model=HealthOut)
async def health():
    return HealthOut(
        message="Server is running",
        timestamp=datetime.now(timezone.utc),
    )


# ------------------------------------------------------------------
# Readiness probe
# ------------------------------------------------------------------
@router.get("/ready")
async def ready(repo: RepoDep):
    try:
        await repo.ping()
        return {"success": True, "database": "up"}

    except StorageError as e:
        logger.error("Readiness probe failed", exc_info=True)
        detail = str(e.__cause__ or e) if settings.env != "prod" else "unreachable"

        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "database": "unreachable",
                "message": detail,
            },
        )
