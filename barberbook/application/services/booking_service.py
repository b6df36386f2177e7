"""
Casos de uso de agendamiento.
Crea reservas y las sincroniza con el Google Calendar del propietario.
"""
import logging
from datetime import datetime
from typing import Any, Dict

import pytz

from barberbook.application.services.date_utils import format_date_human_readable, get_timezone_instance
from barberbook.domain.entities.models import AppointmentRequest
from barberbook.domain.exceptions import ShopNotFoundError, SlotUnavailableError
from barberbook.infrastructure.config.settings import GoogleOAuthCredentials
from barberbook.infrastructure.external import google_calendar
from barberbook.infrastructure.persistence.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

def _as_shop_time(moment: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Interpreta horas sin zona en la hora local de la barbería."""
    if moment.tzinfo is None:
        return tz.localize(moment)
    return moment.astimezone(tz)

async def create_appointment(
    store: SupabaseService,
    request: AppointmentRequest,
    google_credentials: GoogleOAuthCredentials
) -> Dict[str, Any]:
    """
    Crea un agendamiento.

    1. Verifica que el horario siga libre.
    2. Busca el cliente por email o lo crea.
    3. Inserta el agendamiento (la restricción de exclusión de la base de
       datos impide reservas solapadas concurrentes).
    4. Si la barbería conectó Google Calendar, crea el evento.

    Args:
        store: Servicio de base de datos
        request: Datos del formulario de agendamiento
        google_credentials: Credenciales de la aplicación OAuth

    Returns:
        El agendamiento guardado

    Raises:
        ShopNotFoundError: Si la barbería no existe
        SlotUnavailableError: Si el horario ya está ocupado
    """
    shop_id = str(request.shop_id)
    logger.info(f"[agendamento] recebendo: shop_id={shop_id} email={request.cliente_email} "
                f"inicio={request.data_hora_inicio.isoformat()} fim={request.data_hora_fim.isoformat()}")

    shop = await store.get_shop(shop_id)
    if not shop:
        raise ShopNotFoundError(shop_id)

    tz = get_timezone_instance(shop.get("fuso_horario"))
    start = _as_shop_time(request.data_hora_inicio, tz)
    end = _as_shop_time(request.data_hora_fim, tz)

    if await store.find_overlapping_appointments(shop_id, start, end):
        raise SlotUnavailableError()

    cliente = await store.find_client_by_email(request.cliente_email)
    if not cliente:
        cliente = await store.create_client(request.cliente_nome, request.cliente_email, request.cliente_telefone)

    agendamento = await store.insert_appointment({
        "shop_id": shop_id,
        "cliente_id": cliente["id"],
        "servico": request.servico,
        "data_hora_inicio": start.isoformat(),
        "data_hora_fim": end.isoformat(),
    })
    logger.info(f"[agendamento] criado id: {agendamento.get('id')}")

    await sync_calendar_event(store, shop_id, request, start, end, tz.zone, google_credentials)
    return agendamento

async def sync_calendar_event(
    store: SupabaseService,
    shop_id: str,
    request: AppointmentRequest,
    start: datetime,
    end: datetime,
    timezone_name: str,
    google_credentials: GoogleOAuthCredentials
) -> bool:
    """
    Crea el evento del agendamiento en el calendario del propietario.

    El agendamiento ya está guardado: cualquier fallo de la sincronización
    se registra y no se propaga.

    Returns:
        True si el evento se creó
    """
    tokens = await store.get_google_tokens(shop_id)
    if not tokens or not tokens.get("refresh_token"):
        return False

    missing = google_credentials.missing()
    if missing:
        logger.warning(f"Google Calendar não configurado, faltam: {', '.join(missing)}")
        return False

    try:
        service, access_token = google_calendar.build_calendar_service(google_credentials, tokens["refresh_token"])
        await store.save_google_tokens(shop_id, {"access_token": access_token or tokens.get("access_token")})

        body = google_calendar.build_event_body(
            request.cliente_nome, request.cliente_email, request.servico, start, end, timezone_name
        )
        body["description"] += f"\nData: {format_date_human_readable(start)}"
        google_calendar.create_event(service, body)
        return True
    except Exception as e:
        logger.error(f"Erro ao criar evento no Google Calendar (token pode ter sido revogado): {str(e)}")
        return False
