"""
Cálculo de disponibilidad de una barbería.
Genera los slots a partir de los periodos de atención del día y descarta
los que se solapan con agendamientos existentes.
"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Tuple

import pytz

from barberbook.domain.entities.models import Appointment, OpeningWindow, Slot
from barberbook.application.services.date_utils import (
    get_timezone_instance, localize, parse_timestamp, sunday_based_weekday
)
from barberbook.infrastructure.config.settings import (
    DEFAULT_CLOSE_TIME, DEFAULT_OPEN_TIME, DEFAULT_SLOT_MINUTES
)

Interval = Tuple[datetime, datetime]

def overlaps(start: datetime, end: datetime, other_start: datetime, other_end: datetime) -> bool:
    """Solapamiento de intervalos semiabiertos [start, end)."""
    return other_start < end and other_end > start

def default_window(weekday: int) -> OpeningWindow:
    """Jornada usada cuando la barbería no configuró horarios para el día."""
    return OpeningWindow(
        weekday=weekday,
        open_time=DEFAULT_OPEN_TIME,
        close_time=DEFAULT_CLOSE_TIME,
    )

def booked_intervals(booked: Iterable[Appointment], tz: pytz.BaseTzInfo) -> List[Interval]:
    """Intervalos ocupados; los registros con timestamps inválidos se omiten."""
    intervals = []
    for appointment in booked:
        start = parse_timestamp(appointment.start_timestamp, tz)
        end = parse_timestamp(appointment.end_timestamp, tz)
        if start is None or end is None:
            continue
        intervals.append((start, end))
    return intervals

def compute_slots(
    windows: Iterable[OpeningWindow],
    booked: Iterable[Appointment],
    day: date,
    default_slot_minutes: Optional[int] = None,
    timezone: Optional[str] = None,
) -> List[Slot]:
    """
    Calcula los slots libres de una barbería para una fecha.

    Para cada periodo del día de la semana de `day` avanza desde la
    apertura en pasos de la duración del slot, emitiendo [actual, actual+duración)
    mientras quepa antes del cierre. Un slot se descarta si se solapa con
    algún agendamiento. Sin periodos para ese día se usa la jornada por
    defecto (09:00-17:00).

    Args:
        windows: Periodos de atención de la barbería (de cualquier día)
        booked: Agendamientos existentes para la fecha
        day: Fecha consultada
        default_slot_minutes: Duración usada cuando el periodo no define una
            (el intervalo de la barbería)
        timezone: Zona horaria IANA de la barbería

    Returns:
        Lista ordenada de slots disponibles
    """
    tz = get_timezone_instance(timezone)
    fallback_length = default_slot_minutes or DEFAULT_SLOT_MINUTES
    weekday = sunday_based_weekday(day)

    todays = [window for window in windows if window.weekday == weekday]
    if not todays:
        todays = [default_window(weekday)]

    busy = booked_intervals(booked, tz)
    slots = []

    for window in todays:
        length = window.slot_length_minutes or fallback_length
        if length <= 0:
            continue
        step = timedelta(minutes=length)

        current = localize(day, window.open_time, tz)
        close = localize(day, window.close_time, tz)

        while current + step <= close:
            slot_end = tz.normalize(current + step)
            if not any(overlaps(current, slot_end, start, end) for start, end in busy):
                slots.append(Slot(start=current, end=slot_end))
            current = slot_end

    return slots
