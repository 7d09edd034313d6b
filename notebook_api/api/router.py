"""Agregador de routers de la API (montado bajo `api_prefix`)."""
from fastapi import APIRouter

from notebook_api.api.routers import notes, tasks

api_router = APIRouter()
api_router.include_router(notes.router)
api_router.include_router(tasks.router)
