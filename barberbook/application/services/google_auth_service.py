"""
Flujo OAuth2 para conectar el Google Calendar de una barbería.
"""
import asyncio
import logging
from urllib.parse import urlencode

import aiohttp

from barberbook.domain.exceptions import BookingError
from barberbook.infrastructure.config.settings import GoogleOAuthCredentials
from barberbook.infrastructure.external import google_calendar
from barberbook.infrastructure.persistence.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

def start_google_auth(google_credentials: GoogleOAuthCredentials, shop_id: str) -> str:
    """URL de la pantalla de consentimiento para la barbería."""
    return google_calendar.build_authorization_url(google_credentials, shop_id)

def frontend_redirect(frontend_url: str, status: str) -> str:
    """URL del frontend con el resultado del flujo OAuth."""
    return f"{frontend_url}?{urlencode({'google_auth_status': status})}"

async def complete_google_auth(
    store: SupabaseService,
    google_credentials: GoogleOAuthCredentials,
    code: str,
    shop_id: str,
    frontend_url: str
) -> str:
    """
    Intercambia el código por tokens y los guarda para la barbería.

    Returns:
        URL del frontend a la que redirigir, con google_auth_status=success|error
    """
    try:
        tokens = await google_calendar.exchange_code(google_credentials, code)
        await store.save_google_tokens(shop_id, tokens)
    except (BookingError, aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
        logger.error(f"Erro no callback Google: {str(e)}")
        return frontend_redirect(frontend_url, "error")

    logger.info(f"✅ Google Calendar conectado para a barbearia {shop_id}")
    return frontend_redirect(frontend_url, "success")
