"""
Rutina de mantenimiento que mantiene activo el proyecto de Supabase.
Pensada para ser llamada periódicamente por un monitor externo (UptimeRobot).
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from dateutil import parser as date_parser

from barberbook.domain.exceptions import StoreError
from barberbook.infrastructure.config.settings import MAINTENANCE_INTERVAL_DAYS, MAINTENANCE_TASK_NAME
from barberbook.infrastructure.persistence.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

async def perform_maintenance(
    store: SupabaseService,
    now: Optional[datetime] = None,
    interval_days: int = MAINTENANCE_INTERVAL_DAYS,
    task_name: str = MAINTENANCE_TASK_NAME
) -> Tuple[int, str]:
    """
    Ejecuta la rutina si pasaron al menos `interval_days` desde la última.

    Returns:
        Tupla (código_http, mensaje)
    """
    now = now or datetime.now(timezone.utc)

    try:
        last_log = await store.get_last_maintenance(task_name)
    except StoreError as e:
        # Sin historial legible se ejecuta la rutina igualmente
        logger.error(f"[API] Erro ao buscar log de manutenção: {e.message}")
        last_log = None

    last_execution = None
    if last_log and last_log.get("data_execucao"):
        try:
            last_execution = date_parser.isoparse(last_log["data_execucao"])
        except ValueError:
            logger.warning(f"[API] data_execucao inválida: {last_log['data_execucao']!r}")

    if last_execution is not None:
        if last_execution.tzinfo is None:
            last_execution = last_execution.replace(tzinfo=timezone.utc)
        next_execution = last_execution + timedelta(days=interval_days)
        if next_execution > now:
            logger.info(f"[API] {task_name} não executada. Última execução em {last_execution.isoformat()}. "
                        f"Próxima execução esperada após {next_execution.isoformat()}")
            return 200, f"Manutenção não necessária no momento (intervalo de {interval_days} dias)."

    try:
        await store.ping()
        logger.info(f"[API] {task_name} executada com sucesso.")
        try:
            await store.log_maintenance(task_name, "concluida", now)
        except StoreError as e:
            logger.error(f"[API] Erro ao registrar log de manutenção: {e.message}")
        return 200, "Manutenção concluída com sucesso (Supabase)."
    except StoreError as e:
        logger.error(f"[API] Erro na {task_name}: {e.message}")
        try:
            await store.log_maintenance(task_name, "falha", now)
        except StoreError as log_error:
            logger.error(f"[API] Erro ao registrar falha de manutenção: {log_error.message}")
        return 500, f"Erro na Manutenção: {e.message}"
