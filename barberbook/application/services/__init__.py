"""
Casos de uso de la aplicación.
"""
from barberbook.application.services.availability import compute_slots
from barberbook.application.services.booking_service import create_appointment
from barberbook.application.services.google_auth_service import complete_google_auth, start_google_auth
from barberbook.application.services.maintenance_service import perform_maintenance
from barberbook.application.services.shop_service import (
    get_availability,
    get_shop_detail,
    list_shops,
    register_shop
)

__all__ = [
    'compute_slots',
    'create_appointment',
    'start_google_auth',
    'complete_google_auth',
    'perform_maintenance',
    'get_availability',
    'get_shop_detail',
    'list_shops',
    'register_shop'
]
