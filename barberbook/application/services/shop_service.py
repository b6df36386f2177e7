"""
Casos de uso de barberías: listado, detalle, registro y disponibilidad.
"""
import logging
from datetime import date
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from barberbook.application.services.availability import compute_slots
from barberbook.application.services.date_utils import day_bounds, get_timezone_instance
from barberbook.domain.entities.models import Appointment, OpeningWindow, ShopRegistration, Slot
from barberbook.domain.exceptions import ShopNotFoundError, StoreError
from barberbook.infrastructure.persistence.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

async def list_shops(store: SupabaseService) -> List[Dict[str, Any]]:
    """Barberías disponibles para el formulario de agendamiento."""
    return await store.list_shops()

async def get_shop_detail(store: SupabaseService, shop_id: str) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Obtiene una barbería y sus horarios de atención.

    Raises:
        ShopNotFoundError: Si la barbería no existe
    """
    shop = await store.get_shop(shop_id)
    if not shop:
        raise ShopNotFoundError(shop_id)
    opening_hours = await store.get_opening_hours(shop_id)
    return shop, opening_hours

def parse_opening_windows(rows: List[Dict[str, Any]]) -> List[OpeningWindow]:
    """Convierte las filas de barbearia_horarios, omitiendo las inválidas."""
    windows = []
    for row in rows:
        try:
            windows.append(OpeningWindow.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Horário inválido ignorado {row}: {e.error_count()} erro(s)")
    return windows

async def get_availability(store: SupabaseService, shop_id: str, day: date) -> List[Slot]:
    """
    Calcula los slots disponibles de una barbería en una fecha.

    Args:
        store: Servicio de base de datos
        shop_id: ID de la barbería
        day: Fecha consultada

    Returns:
        Lista de slots libres en la zona horaria de la barbería
    """
    shop = await store.get_shop(shop_id)
    if not shop:
        raise ShopNotFoundError(shop_id)

    tz = get_timezone_instance(shop.get("fuso_horario"))
    windows = parse_opening_windows(await store.get_opening_hours(shop_id))

    start, end = day_bounds(day, tz)
    rows = await store.find_overlapping_appointments(shop_id, start, end)
    logger.info(f"/api/barbearias/{shop_id}/availability for {day.isoformat()} - found appointments: {len(rows)}")

    booked = [Appointment.model_validate(row) for row in rows]
    return compute_slots(
        windows,
        booked,
        day,
        default_slot_minutes=shop.get("intervalo"),
        timezone=tz.zone,
    )

async def register_shop(store: SupabaseService, registration: ShopRegistration) -> Dict[str, Any]:
    """
    Registra una barbería y sus horarios de atención.

    Si los horarios no se pueden guardar, la barbería se mantiene creada y
    el error solo se registra en el log.

    Raises:
        DuplicateShopError: Si el email ya está en uso
    """
    shop = await store.insert_shop(registration.shop_row())
    logger.info(f"[API] Barbearia cadastrada com sucesso: id={shop.get('id')} nome={shop.get('nome')}")

    if registration.horarios:
        rows = [horario.to_row(shop["id"]) for horario in registration.horarios]
        try:
            await store.insert_opening_hours(rows)
        except StoreError as e:
            logger.error(f"[API] Erro ao inserir horários, mas a barbearia foi criada: {e.message}")

    return shop
