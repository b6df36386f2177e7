"""Tests for appointment creation and calendar sync."""

from unittest.mock import MagicMock, patch

import pytest

from barberbook.application.services.booking_service import create_appointment
from barberbook.domain.entities.models import AppointmentRequest
from barberbook.domain.exceptions import ShopNotFoundError, SlotUnavailableError


@pytest.fixture
def booking_request():
    return AppointmentRequest(
        shop_id="shop-1",
        cliente_nome="João Silva",
        cliente_email="joao@example.com",
        cliente_telefone="11999990000",
        servico="Corte",
        data_hora_inicio="2025-03-10T09:00:00",
        data_hora_fim="2025-03-10T09:30:00",
    )


@pytest.mark.asyncio
async def test_creates_client_and_appointment(mock_store, google_oauth, booking_request):
    agendamento = await create_appointment(mock_store, booking_request, google_oauth)

    mock_store.create_client.assert_awaited_once_with("João Silva", "joao@example.com", "11999990000")
    mock_store.insert_appointment.assert_called_once_with({
        "shop_id": "shop-1",
        "cliente_id": 7,
        "servico": "Corte",
        "data_hora_inicio": "2025-03-10T09:00:00-03:00",
        "data_hora_fim": "2025-03-10T09:30:00-03:00",
    })
    assert agendamento["id"] == 99


@pytest.mark.asyncio
async def test_reuses_existing_client(mock_store, google_oauth, booking_request):
    mock_store.find_client_by_email.return_value = {"id": 3}

    agendamento = await create_appointment(mock_store, booking_request, google_oauth)

    mock_store.create_client.assert_not_called()
    assert agendamento["cliente_id"] == 3


@pytest.mark.asyncio
async def test_aware_times_are_converted_to_shop_timezone(mock_store, google_oauth, booking_request):
    request = AppointmentRequest(
        **{**booking_request.model_dump(),
           "data_hora_inicio": "2025-03-10T12:00:00Z",
           "data_hora_fim": "2025-03-10T12:30:00Z"}
    )

    await create_appointment(mock_store, request, google_oauth)

    row = mock_store.insert_appointment.call_args.args[0]
    assert row["data_hora_inicio"] == "2025-03-10T09:00:00-03:00"


@pytest.mark.asyncio
async def test_rejects_taken_slot(mock_store, google_oauth, booking_request):
    mock_store.find_overlapping_appointments.return_value = [
        {"id": 1, "data_hora_inicio": "2025-03-10T09:15:00-03:00", "data_hora_fim": "2025-03-10T09:45:00-03:00"}
    ]

    with pytest.raises(SlotUnavailableError):
        await create_appointment(mock_store, booking_request, google_oauth)

    mock_store.insert_appointment.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_shop(mock_store, google_oauth, booking_request):
    mock_store.get_shop.return_value = None

    with pytest.raises(ShopNotFoundError):
        await create_appointment(mock_store, booking_request, google_oauth)


@pytest.mark.asyncio
async def test_concurrent_insert_conflict_propagates(mock_store, google_oauth, booking_request):
    mock_store.insert_appointment.side_effect = SlotUnavailableError()

    with pytest.raises(SlotUnavailableError):
        await create_appointment(mock_store, booking_request, google_oauth)


@pytest.mark.asyncio
async def test_creates_calendar_event_when_shop_is_connected(mock_store, google_oauth, booking_request):
    mock_store.get_google_tokens.return_value = {"access_token": "old", "refresh_token": "refresh"}
    service = MagicMock()

    with patch(
        "barberbook.infrastructure.external.google_calendar.build_calendar_service",
        return_value=(service, "new-token"),
    ) as mock_build:
        await create_appointment(mock_store, booking_request, google_oauth)

    mock_build.assert_called_once_with(google_oauth, "refresh")
    mock_store.save_google_tokens.assert_awaited_once_with("shop-1", {"access_token": "new-token"})

    body = service.events().insert.call_args.kwargs["body"]
    assert service.events().insert.call_args.kwargs["calendarId"] == "primary"
    assert body["summary"] == "Agendamento - João Silva"
    assert body["start"] == {"dateTime": "2025-03-10T09:00:00-03:00", "timeZone": "America/Sao_Paulo"}
    assert "Serviço: Corte" in body["description"]


@pytest.mark.asyncio
async def test_calendar_failure_keeps_appointment(mock_store, google_oauth, booking_request):
    mock_store.get_google_tokens.return_value = {"access_token": "old", "refresh_token": "revoked"}

    with patch(
        "barberbook.infrastructure.external.google_calendar.build_calendar_service",
        side_effect=Exception("invalid_grant"),
    ):
        agendamento = await create_appointment(mock_store, booking_request, google_oauth)

    assert agendamento["id"] == 99


@pytest.mark.asyncio
async def test_skips_calendar_without_refresh_token(mock_store, google_oauth, booking_request):
    mock_store.get_google_tokens.return_value = {"access_token": "only-access", "refresh_token": None}

    with patch("barberbook.infrastructure.external.google_calendar.build_calendar_service") as mock_build:
        await create_appointment(mock_store, booking_request, google_oauth)

    mock_build.assert_not_called()
