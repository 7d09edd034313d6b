"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from notebook_api.api.deps import get_settings
from notebook_api.api.schemas.health import HealthOut, PingOut
from notebook_api.core.config import Settings
from notebook_api.infrastructure.db.mongo import db_ready


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable

BANNER = "Student Notebook Backend API. Use /notes for operations."


@router.get("/", response_class=PlainTextResponse, summary="Banner de la API")
def banner() -> str:
    return BANNER


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health(settings: Settings = Depends(get_settings)) -> HealthOut:
    if settings.storage_backend == "mongo":
        ready = db_ready()
        return HealthOut(ok=ready, storage_backend="mongo", mongo_ready=ready)
    return HealthOut(ok=True, storage_backend=settings.storage_backend)
