"""
Excepciones de dominio.
Los servicios las lanzan y la capa HTTP las traduce a respuestas de error.
"""
from typing import Optional


class BookingError(Exception):
    """Error base de la aplicación de agendamiento."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(BookingError):
    """Fallo al hablar con la base de datos (conserva el código de PostgreSQL)."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class StoreUnavailableError(StoreError):
    """El cliente de Supabase no está configurado."""
    status_code = 503


class ShopNotFoundError(BookingError):
    status_code = 404

    def __init__(self, shop_id: str):
        super().__init__("Barbearia não encontrada")
        self.shop_id = shop_id


class DuplicateShopError(BookingError):
    status_code = 409

    def __init__(self):
        super().__init__("Este email já está em uso.")


class SlotUnavailableError(BookingError):
    """Ya existe un agendamiento que se solapa con el intervalo pedido."""
    status_code = 409

    def __init__(self):
        super().__init__("Horário indisponível para esta barbearia")


class CalendarSyncError(BookingError):
    """No se pudo sincronizar con Google Calendar."""
