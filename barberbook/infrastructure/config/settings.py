"""
Configuración centralizada del proyecto.
Este módulo gestiona todas las variables de configuración y entorno.
"""
import os
from dataclasses import dataclass
from datetime import time
from dotenv import load_dotenv
from typing import Dict, Any, List, Optional
from enum import Enum, auto

# Carga explícita del archivo .env
load_dotenv(verbose=True)

# Enumeración de zonas horarias soportadas
class TimeZones(Enum):
    """Enumeración de zonas horarias soportadas (escalable para futuros añadidos)"""
    SAO_PAULO = auto()
    MANAUS = auto()
    FORTALEZA = auto()

# Mapa de zonas horarias
TIMEZONE_MAP = {
    TimeZones.SAO_PAULO: "America/Sao_Paulo",
    TimeZones.MANAUS: "America/Manaus",
    TimeZones.FORTALEZA: "America/Fortaleza",
}

# Configuración por defecto
DEFAULT_TIMEZONE = TimeZones.SAO_PAULO

# Configuración de Supabase (la service role key es necesaria en el backend)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_KEY")

# Configuración de Google OAuth2 / Calendar
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = os.getenv("GOOGLE_CLIENT_SECRET")
GOOGLE_REDIRECT_URI = os.getenv("GOOGLE_REDIRECT_URI")
GOOGLE_CALENDAR_SCOPES = ["https://www.googleapis.com/auth/calendar.events"]

# Frontend al que se redirige tras el flujo OAuth
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# Orígenes permitidos por CORS
ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "").split(",") + [
        os.getenv("VITE_FRONTEND_URL", ""),
        "http://localhost:5173",
    ]
    if origin.strip()
]

# Configuración del servidor
API_PORT = int(os.getenv("API_PORT", os.getenv("PORT", "5000")))
API_HOST = os.getenv("API_HOST", "0.0.0.0")
PUBLIC_DIR = os.getenv("PUBLIC_DIR", "public")

# Jornada por defecto cuando una barbería no tiene horarios para el día
DEFAULT_SLOT_MINUTES = int(os.getenv("DEFAULT_SLOT_MINUTES", "30"))
DEFAULT_OPEN_TIME = time.fromisoformat(os.getenv("DEFAULT_OPEN_TIME", "09:00"))
DEFAULT_CLOSE_TIME = time.fromisoformat(os.getenv("DEFAULT_CLOSE_TIME", "17:00"))

# Rutina de mantenimiento (mantiene activo el proyecto de Supabase)
MAINTENANCE_INTERVAL_DAYS = int(os.getenv("MAINTENANCE_INTERVAL_DAYS", "6"))
MAINTENANCE_TASK_NAME = "Rotina de Manutenção"


@dataclass(frozen=True)
class GoogleOAuthCredentials:
    """Credenciales explícitas de la aplicación OAuth de Google."""
    client_id: Optional[str]
    client_secret: Optional[str]
    redirect_uri: Optional[str]

    def missing(self) -> List[str]:
        """Nombres de las variables de entorno que faltan."""
        required = {
            "GOOGLE_CLIENT_ID": self.client_id,
            "GOOGLE_CLIENT_SECRET": self.client_secret,
            "GOOGLE_REDIRECT_URI": self.redirect_uri,
        }
        return [name for name, value in required.items() if not value]


def get_google_credentials() -> GoogleOAuthCredentials:
    """Construye las credenciales de Google a partir del entorno."""
    return GoogleOAuthCredentials(
        client_id=GOOGLE_CLIENT_ID,
        client_secret=GOOGLE_CLIENT_SECRET,
        redirect_uri=GOOGLE_REDIRECT_URI,
    )

# Función para obtener la configuración como diccionario
def get_settings() -> Dict[str, Any]:
    """Retorna la configuración actual como un diccionario."""
    return {
        "supabase": {
            "url": SUPABASE_URL,
            "key": SUPABASE_KEY,
        },
        "google": {
            "client_id": GOOGLE_CLIENT_ID,
            "redirect_uri": GOOGLE_REDIRECT_URI,
            "scopes": GOOGLE_CALENDAR_SCOPES,
        },
        "server": {
            "host": API_HOST,
            "port": API_PORT,
            "allowed_origins": ALLOWED_ORIGINS,
            "frontend_url": FRONTEND_URL,
            "public_dir": PUBLIC_DIR,
        },
        "schedule": {
            "slot_minutes": DEFAULT_SLOT_MINUTES,
            "open_time": DEFAULT_OPEN_TIME.isoformat(),
            "close_time": DEFAULT_CLOSE_TIME.isoformat(),
        },
        "maintenance": {
            "interval_days": MAINTENANCE_INTERVAL_DAYS,
            "task_name": MAINTENANCE_TASK_NAME,
        },
        "timezone": {
            "default": TIMEZONE_MAP[DEFAULT_TIMEZONE],
        }
    }
