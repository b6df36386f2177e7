"""
Modelos específicos relacionados con horarios y disponibilidad.
Define las ventanas de atención, los agendamientos ocupados y los slots libres.
"""
from datetime import datetime, time
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

class OpeningWindow(BaseModel):
    """Periodo de atención de una barbería en un día de la semana (0=domingo)"""
    model_config = ConfigDict(populate_by_name=True)

    weekday: int = Field(..., ge=0, le=6, alias="dia_semana", description="Día de la semana, 0=domingo")
    open_time: time = Field(..., alias="hora_abertura", description="Hora de apertura")
    close_time: time = Field(..., alias="hora_fechamento", description="Hora de cierre")
    slot_length_minutes: Optional[int] = Field(None, alias="intervalo_minutos", description="Duración de cada slot")

class Appointment(BaseModel):
    """Intervalo ocupado por un agendamiento existente.

    Los timestamps se guardan tal como vienen de la base de datos; se
    interpretan al calcular la disponibilidad.
    """
    model_config = ConfigDict(populate_by_name=True)

    start_timestamp: Union[datetime, str, None] = Field(None, alias="data_hora_inicio")
    end_timestamp: Union[datetime, str, None] = Field(None, alias="data_hora_fim")

class Slot(BaseModel):
    """Intervalo libre [start, end) que puede reservarse"""
    start: datetime = Field(..., description="Inicio del slot (ISO-8601)")
    end: datetime = Field(..., description="Fin del slot (ISO-8601)")
