"""
Modelos específicos relacionados con agendamientos.
Define las estructuras de datos utilizadas al crear una reserva.
"""
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, EmailStr, Field, model_validator

class AppointmentRequest(BaseModel):
    """Modelo para solicitudes de agendamiento enviadas por el formulario"""
    shop_id: Union[int, str] = Field(..., description="ID de la barbería")
    cliente_nome: str = Field(..., min_length=1, description="Nombre completo del cliente")
    cliente_email: EmailStr = Field(..., description="Correo electrónico del cliente")
    cliente_telefone: Optional[str] = Field(None, description="Teléfono del cliente")
    servico: Optional[str] = Field(None, description="Servicio solicitado")
    data_hora_inicio: datetime = Field(..., description="Inicio del agendamiento (ISO-8601)")
    data_hora_fim: datetime = Field(..., description="Fin del agendamiento (ISO-8601)")

    @model_validator(mode="after")
    def check_interval(self) -> "AppointmentRequest":
        # Ambos con offset o ambos sin offset (hora local de la barbería)
        if (self.data_hora_inicio.tzinfo is None) != (self.data_hora_fim.tzinfo is None):
            raise ValueError("data_hora_inicio e data_hora_fim devem usar o mesmo formato de fuso horário")
        if self.data_hora_fim <= self.data_hora_inicio:
            raise ValueError("data_hora_fim deve ser posterior a data_hora_inicio")
        return self
