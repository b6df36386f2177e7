"""
Endpoints de servicio: salud, keep-alive y mantenimiento.
"""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response

from barberbook.application.services import perform_maintenance
from barberbook.domain.entities.models import HealthResponse
from barberbook.infrastructure.persistence.supabase_service import SupabaseService
from barberbook.presentation.api.dependencies import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Endpoint para verificar que el servidor está en línea."""
    return {"ok": True}

# Rutas "anti-sleep" para monitores como UptimeRobot
@router.api_route("/ping", methods=["GET", "HEAD"])
async def ping(request: Request):
    logger.info(f"[API] {request.method} /api/ping - Render Ativo.")
    if request.method == "HEAD":
        return Response(status_code=200)
    return PlainTextResponse("Serviço ativo.")

@router.api_route("/maintenance", methods=["GET", "HEAD"])
async def maintenance(request: Request, store: SupabaseService = Depends(get_store)):
    """Ejecuta la rutina de mantenimiento de Supabase si corresponde."""
    status_code, message = await perform_maintenance(store)
    if request.method == "HEAD":
        return Response(status_code=status_code)
    return PlainTextResponse(message, status_code=status_code)
