"""
Modelos específicos relacionados con las barberías.
Define las estructuras para registrar y consultar barberías y sus horarios.
"""
from datetime import time
from typing import List, Optional, Union
import pytz
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from barberbook.infrastructure.config.settings import DEFAULT_SLOT_MINUTES, DEFAULT_TIMEZONE, TIMEZONE_MAP

class OpeningHoursInput(BaseModel):
    """Horario enviado por el formulario de registro"""
    dia_semana: int = Field(..., ge=0, le=6, description="Día de la semana, 0=domingo")
    hora_abertura: time = Field(..., description="Hora de apertura (HH:MM)")
    hora_fechamento: time = Field(..., description="Hora de cierre (HH:MM)")
    intervalo_minutos: Optional[int] = Field(None, gt=0, description="Duración de cada slot")

    @model_validator(mode="after")
    def check_closes_after_opening(self) -> "OpeningHoursInput":
        if self.hora_fechamento <= self.hora_abertura:
            raise ValueError("hora_fechamento deve ser posterior a hora_abertura")
        return self

    def to_row(self, shop_id: str) -> dict:
        """Fila lista para insertar en barbearia_horarios."""
        row = {
            "shop_id": shop_id,
            "dia_semana": self.dia_semana,
            "hora_abertura": self.hora_abertura.isoformat(),
            "hora_fechamento": self.hora_fechamento.isoformat(),
        }
        if self.intervalo_minutos is not None:
            row["intervalo_minutos"] = self.intervalo_minutos
        return row

class ShopRegistration(BaseModel):
    """Modelo para el registro de una nueva barbería"""
    nome: str = Field(..., min_length=1, description="Nombre de la barbería")
    proprietario: Optional[str] = Field(None, description="Nombre del propietario")
    email: EmailStr = Field(..., description="Correo de contacto (único)")
    telefone: Optional[str] = Field(None, description="Teléfono")
    endereco: Optional[str] = Field(None, description="Dirección")
    intervalo: int = Field(DEFAULT_SLOT_MINUTES, gt=0, description="Duración por defecto de los slots")
    fuso_horario: str = Field(TIMEZONE_MAP[DEFAULT_TIMEZONE], description="Zona horaria IANA")
    horarios: List[OpeningHoursInput] = Field(default_factory=list)

    @field_validator("fuso_horario")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        if value not in pytz.all_timezones_set:
            raise ValueError(f"Fuso horário inválido: {value}")
        return value

    def shop_row(self) -> dict:
        """Columnas de la tabla barbearias."""
        return self.model_dump(exclude={"horarios"})

class ShopSummary(BaseModel):
    """Barbería tal como se lista en el formulario de agendamiento"""
    id: Union[int, str]
    nome: str
    intervalo: Optional[int] = None
    fuso_horario: Optional[str] = None

class OpeningHours(BaseModel):
    """Horario de atención tal como se devuelve al frontend"""
    dia_semana: int
    hora_abertura: str
    hora_fechamento: str
    intervalo_minutos: Optional[int] = None
