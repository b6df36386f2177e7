"""
Integración con Google OAuth2 y Google Calendar.
Funciones sin estado: cada llamada recibe credenciales explícitas y devuelve
valores de corta duración (URL, tokens, cliente de Calendar).
"""
import json
import logging
import aiohttp
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from barberbook.domain.exceptions import CalendarSyncError
from barberbook.infrastructure.config.settings import GoogleOAuthCredentials, GOOGLE_CALENDAR_SCOPES

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"

async def api_request(method: str, url: str, form: Optional[Dict[str, Any]] = None) -> Tuple[int, Any]:
    """
    Realiza una solicitud HTTP con datos de formulario.

    Args:
        method: Método HTTP (get, post, etc.)
        url: URL de la solicitud
        form: Datos codificados como formulario

    Returns:
        Tupla con (código_respuesta, datos_json)
    """
    async with aiohttp.ClientSession() as session:
        method_func = getattr(session, method.lower())

        async with method_func(url, data=form) as response:
            try:
                response_data = await response.json()
            except (aiohttp.ContentTypeError, json.JSONDecodeError):
                response_text = await response.text()
                response_data = {"text": response_text}

            return response.status, response_data

def build_authorization_url(credentials: GoogleOAuthCredentials, shop_id: str) -> str:
    """
    Construye la URL de consentimiento de Google.

    El ID de la barbería viaja en el parámetro `state` para recuperarlo
    en el callback.
    """
    params = {
        "client_id": credentials.client_id,
        "redirect_uri": credentials.redirect_uri,
        "response_type": "code",
        "scope": " ".join(GOOGLE_CALENDAR_SCOPES),
        "access_type": "offline",
        "prompt": "consent",
        "state": shop_id,
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

async def exchange_code(credentials: GoogleOAuthCredentials, code: str) -> Dict[str, Any]:
    """
    Intercambia el código de autorización por tokens.

    Returns:
        Diccionario con access_token, refresh_token, scope, token_type y expiry_date

    Raises:
        CalendarSyncError: Si Google rechaza el código o la respuesta no es válida
    """
    status_code, data = await api_request("post", GOOGLE_TOKEN_URL, form={
        "code": code,
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "redirect_uri": credentials.redirect_uri,
        "grant_type": "authorization_code",
    })

    if not isinstance(data, dict):
        raise CalendarSyncError(f"Resposta inesperada do Google: {status_code} {data!r}")

    if status_code != 200 or "access_token" not in data:
        details = data.get("error_description") or data.get("error") or data.get("text", "")
        raise CalendarSyncError(f"Falha ao trocar código do Google: {status_code} {details}")

    try:
        expires_in = int(data.get("expires_in", 3600))
    except (TypeError, ValueError):
        raise CalendarSyncError(f"expires_in inválido na resposta do Google: {data.get('expires_in')!r}")
    expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
    return {
        "access_token": data["access_token"],
        "refresh_token": data.get("refresh_token"),
        "scope": data.get("scope"),
        "token_type": data.get("token_type"),
        "expiry_date": int(expiry.timestamp() * 1000),
    }

def build_calendar_service(credentials: GoogleOAuthCredentials, refresh_token: str) -> Tuple[Any, str]:
    """
    Renueva el access token y construye un cliente de Google Calendar v3.

    Returns:
        Tupla (servicio_calendar, access_token_nuevo)
    """
    creds = Credentials(
        token=None,
        refresh_token=refresh_token,
        token_uri=GOOGLE_TOKEN_URL,
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
        scopes=GOOGLE_CALENDAR_SCOPES,
    )
    creds.refresh(Request())
    service = build("calendar", "v3", credentials=creds, cache_discovery=False)
    return service, creds.token

def build_event_body(
    cliente_nome: str,
    cliente_email: str,
    servico: Optional[str],
    start: datetime,
    end: datetime,
    timezone_name: str
) -> Dict[str, Any]:
    """Evento del agendamiento en el calendario del propietario."""
    return {
        "summary": f"Agendamento - {cliente_nome}",
        "description": f"Serviço: {servico or '-'}\nCliente: {cliente_nome}\nEmail: {cliente_email}",
        "start": {"dateTime": start.isoformat(), "timeZone": timezone_name},
        "end": {"dateTime": end.isoformat(), "timeZone": timezone_name},
    }

def create_event(service: Any, body: Dict[str, Any], calendar_id: str = "primary") -> Dict[str, Any]:
    """Crea el evento y devuelve la respuesta de la API."""
    event = service.events().insert(calendarId=calendar_id, body=body).execute()
    logger.info(f"📅 Evento creado en Google Calendar: {event.get('id')}")
    return event
