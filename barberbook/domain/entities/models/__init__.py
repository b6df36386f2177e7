"""
Exportación de todos los modelos de dominio.
Este módulo centraliza la exportación de todos los modelos para facilitar su importación.
"""
# Modelos de horarios y disponibilidad
from barberbook.domain.entities.models.schedule_models import (
    OpeningWindow,
    Appointment,
    Slot
)

# Modelos de barberías
from barberbook.domain.entities.models.shop_models import (
    OpeningHoursInput,
    ShopRegistration,
    ShopSummary,
    OpeningHours
)

# Modelos de agendamientos
from barberbook.domain.entities.models.booking_models import (
    AppointmentRequest
)

# Modelos de respuesta
from barberbook.domain.entities.models.response_models import (
    ErrorResponse,
    ShopListResponse,
    ShopDetailResponse,
    ShopCreatedResponse,
    AvailabilityResponse,
    AppointmentResponse,
    HealthResponse
)

# Exportar todos los modelos para facilitar importación
__all__ = [
    # Horarios
    'OpeningWindow',
    'Appointment',
    'Slot',

    # Barberías
    'OpeningHoursInput',
    'ShopRegistration',
    'ShopSummary',
    'OpeningHours',

    # Agendamientos
    'AppointmentRequest',

    # Respuestas
    'ErrorResponse',
    'ShopListResponse',
    'ShopDetailResponse',
    'ShopCreatedResponse',
    'AvailabilityResponse',
    'AppointmentResponse',
    'HealthResponse'
]
