"""
Rutas y endpoints de la API de agendamiento.
Define los endpoints HTTP usados por los formularios de agendamiento y registro.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from barberbook.application.services import (
    complete_google_auth,
    create_appointment,
    get_availability,
    get_shop_detail,
    list_shops,
    register_shop,
    start_google_auth
)
from barberbook.application.services.date_utils import parse_iso_date
from barberbook.domain.entities.models import (
    AppointmentRequest,
    AppointmentResponse,
    AvailabilityResponse,
    ErrorResponse,
    ShopCreatedResponse,
    ShopDetailResponse,
    ShopListResponse,
    ShopRegistration
)
from barberbook.infrastructure.config.settings import FRONTEND_URL, GoogleOAuthCredentials
from barberbook.infrastructure.persistence.supabase_service import SupabaseService
from barberbook.presentation.api.dependencies import get_google_oauth, get_store

logger = logging.getLogger(__name__)

# Crear router para los endpoints de la API
router = APIRouter(
    prefix="/api",
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

@router.get("/auth/google", tags=["google"])
async def google_auth(
    shop_id: Optional[str] = Query(None),
    google_oauth: GoogleOAuthCredentials = Depends(get_google_oauth)
):
    """Inicia el flujo OAuth2 redirigiendo a la pantalla de consentimiento de Google."""
    if not shop_id:
        raise HTTPException(status_code=400, detail="Faltando shop_id")

    missing = google_oauth.missing()
    if missing:
        raise HTTPException(status_code=503, detail=f"Google OAuth não configurado: {', '.join(missing)}")

    return RedirectResponse(start_google_auth(google_oauth, shop_id))

@router.get("/auth/google/callback", tags=["google"])
async def google_auth_callback(
    code: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    store: SupabaseService = Depends(get_store),
    google_oauth: GoogleOAuthCredentials = Depends(get_google_oauth)
):
    """
    Callback de Google tras el consentimiento.

    Guarda los tokens asociados a la barbería (recibida en `state`) y
    redirige al frontend con el resultado.
    """
    if not code or not state:
        raise HTTPException(status_code=400, detail="Código ou ShopID ausente.")

    redirect_url = await complete_google_auth(store, google_oauth, code, state, FRONTEND_URL)
    return RedirectResponse(redirect_url)

@router.post("/agendamento", response_model=AppointmentResponse, tags=["agendamentos"])
async def post_appointment(
    appointment: AppointmentRequest,
    store: SupabaseService = Depends(get_store),
    google_oauth: GoogleOAuthCredentials = Depends(get_google_oauth)
):
    """Crea un agendamiento y lo sincroniza con Google Calendar si es posible."""
    agendamento = await create_appointment(store, appointment, google_oauth)
    return {"success": True, "agendamento": agendamento}

@router.get("/barbearias", response_model=ShopListResponse, tags=["barbearias"])
async def get_shops(store: SupabaseService = Depends(get_store)):
    """Lista las barberías para el selector del formulario de agendamiento."""
    return {"success": True, "barbearias": await list_shops(store)}

@router.get("/barbearias/{shop_id}", response_model=ShopDetailResponse, tags=["barbearias"])
async def get_shop(shop_id: str, store: SupabaseService = Depends(get_store)):
    """Detalle de una barbería con sus horarios de atención."""
    barbearia, horarios = await get_shop_detail(store, shop_id)
    return {"success": True, "barbearia": barbearia, "horarios": horarios}

@router.get("/barbearias/{shop_id}/availability", response_model=AvailabilityResponse, tags=["barbearias"])
async def get_shop_availability(
    shop_id: str,
    date: Optional[str] = Query(None, description="Data no formato YYYY-MM-DD"),
    store: SupabaseService = Depends(get_store)
):
    """
    Slots disponibles de una barbería en una fecha.

    Args:
        shop_id: ID de la barbería
        date: Fecha en formato YYYY-MM-DD

    Returns:
        Lista de slots con inicio y fin en ISO-8601
    """
    if not date:
        raise HTTPException(status_code=400, detail="Parâmetro date é obrigatório (YYYY-MM-DD)")
    try:
        day = parse_iso_date(date)
    except ValueError:
        raise HTTPException(status_code=400, detail="Parâmetro date inválido (YYYY-MM-DD)")

    slots = await get_availability(store, shop_id, day)
    return {"success": True, "slots": slots}

@router.post("/barbearias", status_code=201, response_model=ShopCreatedResponse, tags=["barbearias"])
async def post_shop(registration: ShopRegistration, store: SupabaseService = Depends(get_store)):
    """Registra una barbería y sus horarios de atención."""
    logger.info(f"[API] POST /api/barbearias - Recebido: nome={registration.nome} email={registration.email}")
    barbearia = await register_shop(store, registration)
    return {"success": True, "barbearia": barbearia}
