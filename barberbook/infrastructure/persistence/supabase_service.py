"""
Servicio para interactuar con Supabase.
Este módulo maneja todas las operaciones relacionadas con la base de datos Supabase.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any
from supabase import create_client, Client, PostgrestAPIError

from barberbook.domain.exceptions import (
    DuplicateShopError, SlotUnavailableError, StoreError, StoreUnavailableError
)
from barberbook.infrastructure.config.settings import SUPABASE_URL, SUPABASE_KEY

logger = logging.getLogger(__name__)

# Códigos de error de PostgreSQL
UNIQUE_VIOLATION = "23505"
EXCLUSION_VIOLATION = "23P01"

SHOP_COLUMNS = "id, nome, intervalo, fuso_horario"
OPENING_HOURS_COLUMNS = "dia_semana, hora_abertura, hora_fechamento, intervalo_minutos"

class SupabaseService:
    """Clase para gestionar las operaciones con Supabase."""

    def __init__(self, url: Optional[str] = SUPABASE_URL, key: Optional[str] = SUPABASE_KEY):
        """Inicializa el servicio de Supabase con las credenciales."""
        self.client: Optional[Client] = None
        self.connected = False
        self._connect(url, key)

    def _connect(self, url: Optional[str], key: Optional[str]) -> None:
        """Establece la conexión con Supabase."""
        if not all([url, key]):
            logger.warning("⚠️ Las credenciales de Supabase no están configuradas (SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY).")
            return

        try:
            self.client = create_client(url, key)
            self.connected = True
            logger.info("✅ Conexión a Supabase establecida correctamente.")
        except Exception as e:
            logger.error(f"⚠️ Error al conectar con Supabase: {str(e)}")
            self.connected = False

    def is_connected(self) -> bool:
        """Verifica si la conexión está activa."""
        return self.connected and self.client is not None

    def _table(self, name: str):
        if not self.is_connected():
            raise StoreUnavailableError("Banco de dados não configurado")
        return self.client.table(name)

    @staticmethod
    def _run(query, action: str) -> List[Dict[str, Any]]:
        """Ejecuta una consulta y traduce los errores de PostgREST."""
        try:
            response = query.execute()
        except PostgrestAPIError as e:
            logger.error(f"⚠️ Error al {action}: {e.message} (código {e.code})")
            raise StoreError(e.message or f"Erro ao {action}", code=e.code) from e
        return response.data or []

    @staticmethod
    def _first(rows: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        return rows[0] if rows else None

    # --- Barberías ---

    async def list_shops(self) -> List[Dict[str, Any]]:
        """Lista todas las barberías ordenadas por nombre."""
        query = self._table("barbearias").select(SHOP_COLUMNS).order("nome")
        return self._run(query, "listar barbearias")

    async def get_shop(self, shop_id: str) -> Optional[Dict[str, Any]]:
        """
        Obtiene una barbería por su ID.

        Returns:
            Diccionario con los datos de la barbería o None si no existe
        """
        query = self._table("barbearias").select(SHOP_COLUMNS).eq("id", shop_id).limit(1)
        return self._first(self._run(query, "buscar barbearia"))

    async def insert_shop(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Inserta una barbería.

        Raises:
            DuplicateShopError: Si el email ya está registrado
        """
        try:
            rows = self._run(self._table("barbearias").insert(data), "inserir barbearia")
        except StoreError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateShopError() from e
            raise
        return rows[0]

    async def get_opening_hours(self, shop_id: str) -> List[Dict[str, Any]]:
        """Obtiene los horarios de atención de una barbería."""
        query = self._table("barbearia_horarios").select(OPENING_HOURS_COLUMNS).eq("shop_id", shop_id)
        return self._run(query, "buscar horários")

    async def insert_opening_hours(self, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Inserta los horarios de atención de una barbería."""
        if not rows:
            return []
        return self._run(self._table("barbearia_horarios").insert(rows), "inserir horários")

    # --- Agendamientos ---

    async def find_overlapping_appointments(self,
                                            shop_id: str,
                                            start: datetime,
                                            end: datetime) -> List[Dict[str, Any]]:
        """
        Obtiene los agendamientos de una barbería que se solapan con [start, end).

        Args:
            shop_id: ID de la barbería
            start: Inicio del rango (con zona horaria)
            end: Fin del rango (con zona horaria)

        Returns:
            Lista de agendamientos con data_hora_inicio y data_hora_fim
        """
        query = self._table("appointments") \
            .select("id, data_hora_inicio, data_hora_fim") \
            .eq("shop_id", shop_id) \
            .lt("data_hora_inicio", end.isoformat()) \
            .gt("data_hora_fim", start.isoformat()) \
            .order("data_hora_inicio")
        return self._run(query, "buscar agendamentos")

    async def insert_appointment(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Inserta un agendamiento.

        Raises:
            SlotUnavailableError: Si la restricción de exclusión detecta un solapamiento
        """
        try:
            rows = self._run(self._table("appointments").insert(data), "inserir agendamento")
        except StoreError as e:
            if e.code == EXCLUSION_VIOLATION:
                raise SlotUnavailableError() from e
            raise
        return rows[0]

    # --- Clientes ---

    async def find_client_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Busca un cliente por correo electrónico."""
        query = self._table("clientes").select("id").eq("email", email).limit(1)
        return self._first(self._run(query, "buscar cliente"))

    async def create_client(self, nome: str, email: str, telefone: Optional[str]) -> Dict[str, Any]:
        """Crea un cliente y devuelve el registro guardado."""
        data = {"nome": nome, "email": email, "telefone": telefone}
        return self._run(self._table("clientes").insert(data), "criar cliente")[0]

    # --- Tokens de Google ---

    async def get_google_tokens(self, shop_id: str) -> Optional[Dict[str, Any]]:
        """Obtiene los tokens de Google Calendar de una barbería."""
        query = self._table("shop_google_tokens") \
            .select("access_token, refresh_token") \
            .eq("shop_id", shop_id) \
            .limit(1)
        return self._first(self._run(query, "buscar tokens do Google"))

    async def save_google_tokens(self, shop_id: str, tokens: Dict[str, Any]) -> None:
        """Crea o actualiza los tokens de Google de una barbería."""
        data = {
            "shop_id": shop_id,
            **tokens,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        query = self._table("shop_google_tokens").upsert(data, on_conflict="shop_id")
        self._run(query, "salvar tokens do Google")

    # --- Mantenimiento ---

    async def ping(self) -> None:
        """Consulta ligera para mantener activo el proyecto."""
        self._run(self._table("barbearias").select("id").limit(1), "consultar barbearias")

    async def get_last_maintenance(self, task_name: str) -> Optional[Dict[str, Any]]:
        """Obtiene el último registro de mantenimiento de una tarea."""
        query = self._table("manutencao_log") \
            .select("data_execucao") \
            .eq("tarefa", task_name) \
            .order("data_execucao", desc=True) \
            .limit(1)
        return self._first(self._run(query, "buscar log de manutenção"))

    async def log_maintenance(self, task_name: str, status: str, executed_at: datetime) -> None:
        """Registra una ejecución de mantenimiento."""
        data = {
            "tarefa": task_name,
            "status": status,
            "data_execucao": executed_at.isoformat(),
        }
        self._run(self._table("manutencao_log").insert(data), "registrar log de manutenção")

# Instancia global del servicio
supabase_service = SupabaseService()
