"""
Modelos de respuesta de la API.
Cada endpoint responde con un tipo fijo: éxito con sus campos o error.
"""
from typing import Any, Dict, List, Literal
from pydantic import BaseModel, Field

from barberbook.domain.entities.models.schedule_models import Slot
from barberbook.domain.entities.models.shop_models import OpeningHours, ShopSummary

class ErrorResponse(BaseModel):
    """Respuesta de error común a todos los endpoints"""
    success: Literal[False] = False
    error: str = Field(..., description="Descripción del error")

class ShopListResponse(BaseModel):
    success: Literal[True] = True
    barbearias: List[ShopSummary]

class ShopDetailResponse(BaseModel):
    success: Literal[True] = True
    barbearia: ShopSummary
    horarios: List[OpeningHours]

class ShopCreatedResponse(BaseModel):
    success: Literal[True] = True
    barbearia: Dict[str, Any]

class AvailabilityResponse(BaseModel):
    success: Literal[True] = True
    slots: List[Slot]

class AppointmentResponse(BaseModel):
    success: Literal[True] = True
    agendamento: Dict[str, Any]

class HealthResponse(BaseModel):
    ok: bool = True
