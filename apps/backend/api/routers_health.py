from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from apps.backend.services.source import EmissionsSource
from .deps import get_source

router = APIRouter(tags=["health"])


@router.get("/health/live")
def live():
    return {"status": "alive"}


@router.get("/health/db")
def db_health(source: EmissionsSource = Depends(get_source)):
    if not source.ping():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ok"}
