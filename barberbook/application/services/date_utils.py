"""
Utilidades para el manejo de fechas y zonas horarias.
Este módulo contiene funciones para el manejo de fechas, conversiones, y formato.
"""
import re
import logging
import pytz
from datetime import date, datetime, time, timedelta
from dateutil import parser as date_parser
from typing import Any, Optional, Tuple, Union
from barberbook.infrastructure.config.settings import TimeZones, TIMEZONE_MAP, DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

def get_timezone_instance(tz: Union[TimeZones, str, None] = DEFAULT_TIMEZONE) -> pytz.BaseTzInfo:
    """
    Obtiene la instancia de zona horaria.

    Acepta un miembro de la enumeración TimeZones o un nombre IANA
    (como el fuso_horario guardado para cada barbería). Los nombres
    desconocidos caen en la zona horaria por defecto.

    Args:
        tz: Zona horaria a utilizar

    Returns:
        Instancia de pytz para la zona horaria solicitada
    """
    if isinstance(tz, TimeZones):
        return pytz.timezone(TIMEZONE_MAP[tz])
    if tz:
        try:
            return pytz.timezone(tz)
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Zona horaria desconocida '{tz}', usando la predeterminada")
    return pytz.timezone(TIMEZONE_MAP[DEFAULT_TIMEZONE])

def parse_iso_date(value: str) -> date:
    """
    Interpreta una fecha en formato estándar YYYY-MM-DD.

    Raises:
        ValueError: Si el texto no es una fecha válida
    """
    if not value or not ISO_DATE_PATTERN.match(value.strip()):
        raise ValueError(f"Data inválida: {value!r}")
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()

def sunday_based_weekday(day: date) -> int:
    """Día de la semana con 0=domingo, tal como se guarda en barbearia_horarios."""
    return (day.weekday() + 1) % 7

def localize(day: date, moment: time, tz: pytz.BaseTzInfo) -> datetime:
    """Combina fecha y hora local de la barbería en un datetime con zona horaria."""
    return tz.localize(datetime.combine(day, moment.replace(tzinfo=None)))

def day_bounds(day: date, tz: pytz.BaseTzInfo) -> Tuple[datetime, datetime]:
    """Inicio y fin (exclusivo) del día en la zona horaria de la barbería."""
    start = localize(day, time(0, 0), tz)
    end = localize(day + timedelta(days=1), time(0, 0), tz)
    return start, end

def parse_timestamp(value: Any, tz: pytz.BaseTzInfo) -> Optional[datetime]:
    """
    Convierte un timestamp guardado en un datetime con zona horaria.

    Los valores sin zona se interpretan en la hora local de la barbería.
    Devuelve None si el valor no se puede interpretar.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return tz.localize(parsed)
    return parsed

def format_date_human_readable(date_obj: Union[date, datetime], include_year: bool = True) -> str:
    """
    Formatea una fecha en formato legible en portugués.

    Args:
        date_obj: Fecha a formatear
        include_year: Si se debe incluir el año en el formato

    Returns:
        Cadena formateada con la fecha
    """
    day_names = ["Segunda-feira", "Terça-feira", "Quarta-feira", "Quinta-feira",
                 "Sexta-feira", "Sábado", "Domingo"]
    month_names = ["", "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
                   "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro"]

    day_name = day_names[date_obj.weekday()]
    day = date_obj.day
    month = month_names[date_obj.month]

    if include_year:
        return f"{day_name} {day} de {month} de {date_obj.year}"
    return f"{day_name} {day} de {month}"
