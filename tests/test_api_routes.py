"""HTTP tests for the booking API."""

from unittest.mock import AsyncMock, patch

from barberbook.domain.exceptions import DuplicateShopError, SlotUnavailableError, StoreError


def test_list_shops(client):
    response = client.get("/api/barbearias")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["barbearias"][0]["nome"] == "Barbearia do Zé"


def test_shop_detail(client, mock_store):
    mock_store.get_opening_hours.return_value = [
        {"dia_semana": 1, "hora_abertura": "09:00:00", "hora_fechamento": "18:00:00", "intervalo_minutos": 30}
    ]

    response = client.get("/api/barbearias/shop-1")

    body = response.json()
    assert body["success"] is True
    assert body["barbearia"]["id"] == "shop-1"
    assert body["horarios"][0]["dia_semana"] == 1


def test_shop_detail_not_found(client, mock_store):
    mock_store.get_shop.return_value = None

    response = client.get("/api/barbearias/missing")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Barbearia não encontrada"}


def test_availability_requires_date(client):
    response = client.get("/api/barbearias/shop-1/availability")

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Parâmetro date é obrigatório (YYYY-MM-DD)"}


def test_availability_rejects_bad_date(client):
    response = client.get("/api/barbearias/shop-1/availability", params={"date": "10/03/2025"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_availability_excludes_booked_slots(client, mock_store):
    mock_store.get_opening_hours.return_value = [
        {"dia_semana": 1, "hora_abertura": "09:00:00", "hora_fechamento": "10:00:00", "intervalo_minutos": 30},
        {"dia_semana": "x", "hora_abertura": "bad", "hora_fechamento": None, "intervalo_minutos": None},
    ]
    mock_store.find_overlapping_appointments.return_value = [
        {"id": 1, "data_hora_inicio": "2025-03-10T09:00:00-03:00", "data_hora_fim": "2025-03-10T09:30:00-03:00"}
    ]

    response = client.get("/api/barbearias/shop-1/availability", params={"date": "2025-03-10"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "slots": [{"start": "2025-03-10T09:30:00-03:00", "end": "2025-03-10T10:00:00-03:00"}],
    }
    shop_id, day_start, day_end = mock_store.find_overlapping_appointments.call_args.args
    assert shop_id == "shop-1"
    assert day_start.isoformat() == "2025-03-10T00:00:00-03:00"
    assert day_end.isoformat() == "2025-03-11T00:00:00-03:00"


def test_availability_without_hours_uses_default_day(client):
    response = client.get("/api/barbearias/shop-1/availability", params={"date": "2025-03-10"})

    slots = response.json()["slots"]
    assert len(slots) == 16
    assert slots[0]["start"] == "2025-03-10T09:00:00-03:00"


def test_register_shop(client, mock_store):
    mock_store.insert_shop.return_value = {"id": "new-shop", "nome": "Navalha"}

    response = client.post("/api/barbearias", json={
        "nome": "Navalha",
        "proprietario": "Carlos",
        "email": "carlos@example.com",
        "intervalo": 45,
        "horarios": [
            {"dia_semana": 2, "hora_abertura": "09:00", "hora_fechamento": "12:00"},
        ],
    })

    assert response.status_code == 201
    assert response.json() == {"success": True, "barbearia": {"id": "new-shop", "nome": "Navalha"}}
    shop_row = mock_store.insert_shop.call_args.args[0]
    assert shop_row["fuso_horario"] == "America/Sao_Paulo"
    assert "horarios" not in shop_row
    mock_store.insert_opening_hours.assert_awaited_once_with([{
        "shop_id": "new-shop",
        "dia_semana": 2,
        "hora_abertura": "09:00:00",
        "hora_fechamento": "12:00:00",
    }])


def test_register_shop_survives_opening_hours_failure(client, mock_store):
    mock_store.insert_shop.return_value = {"id": "new-shop", "nome": "Navalha"}
    mock_store.insert_opening_hours.side_effect = StoreError("insert failed")

    response = client.post("/api/barbearias", json={
        "nome": "Navalha",
        "email": "carlos@example.com",
        "horarios": [{"dia_semana": 2, "hora_abertura": "09:00", "hora_fechamento": "12:00"}],
    })

    assert response.status_code == 201


def test_register_shop_duplicate_email(client, mock_store):
    mock_store.insert_shop.side_effect = DuplicateShopError()

    response = client.post("/api/barbearias", json={"nome": "Navalha", "email": "carlos@example.com"})

    assert response.status_code == 409
    assert response.json() == {"success": False, "error": "Este email já está em uso."}


def test_register_shop_validation(client, mock_store):
    response = client.post("/api/barbearias", json={
        "nome": "Navalha",
        "email": "carlos@example.com",
        "fuso_horario": "Mars/Olympus",
    })

    assert response.status_code == 422
    assert response.json()["success"] is False
    mock_store.insert_shop.assert_not_called()


def test_create_appointment(client, mock_store):
    response = client.post("/api/agendamento", json={
        "shop_id": "shop-1",
        "cliente_nome": "João",
        "cliente_email": "joao@example.com",
        "servico": "Barba",
        "data_hora_inicio": "2025-03-10T09:00:00-03:00",
        "data_hora_fim": "2025-03-10T09:30:00-03:00",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["agendamento"]["id"] == 99


def test_create_appointment_slot_taken(client, mock_store):
    mock_store.insert_appointment.side_effect = SlotUnavailableError()

    response = client.post("/api/agendamento", json={
        "shop_id": "shop-1",
        "cliente_nome": "João",
        "cliente_email": "joao@example.com",
        "data_hora_inicio": "2025-03-10T09:00:00-03:00",
        "data_hora_fim": "2025-03-10T09:30:00-03:00",
    })

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_create_appointment_rejects_inverted_interval(client, mock_store):
    response = client.post("/api/agendamento", json={
        "shop_id": "shop-1",
        "cliente_nome": "João",
        "cliente_email": "joao@example.com",
        "data_hora_inicio": "2025-03-10T10:00:00-03:00",
        "data_hora_fim": "2025-03-10T09:30:00-03:00",
    })

    assert response.status_code == 422
    mock_store.insert_appointment.assert_not_called()


def test_create_appointment_rejects_mixed_offsets(client, mock_store):
    response = client.post("/api/agendamento", json={
        "shop_id": "shop-1",
        "cliente_nome": "João",
        "cliente_email": "joao@example.com",
        "data_hora_inicio": "2025-03-10T09:00:00",
        "data_hora_fim": "2025-03-10T09:30:00-03:00",
    })

    assert response.status_code == 422
    assert response.json()["success"] is False
    mock_store.insert_appointment.assert_not_called()


def test_google_auth_requires_shop_id(client):
    response = client.get("/api/auth/google")

    assert response.status_code == 400
    assert response.json()["error"] == "Faltando shop_id"


def test_google_auth_redirects_to_consent_screen(client):
    response = client.get("/api/auth/google", params={"shop_id": "shop-1"}, follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"].startswith("https://accounts.google.com/o/oauth2/v2/auth?")
    assert "state=shop-1" in response.headers["location"]


def test_google_callback_requires_code_and_state(client):
    response = client.get("/api/auth/google/callback", params={"code": "abc"})

    assert response.status_code == 400


def test_google_callback_redirects_to_frontend(client, mock_store, google_oauth):
    target = "http://localhost:5173?google_auth_status=success"
    with patch(
        "barberbook.presentation.api.routes.complete_google_auth", AsyncMock(return_value=target)
    ) as mock_complete:
        response = client.get(
            "/api/auth/google/callback",
            params={"code": "abc", "state": "shop-1"},
            follow_redirects=False,
        )

    assert response.status_code == 307
    assert response.headers["location"] == target
    assert mock_complete.call_args.args[:4] == (mock_store, google_oauth, "abc", "shop-1")


def test_health_and_ping(client):
    assert client.get("/api/health").json() == {"ok": True}
    assert client.get("/api/ping").text == "Serviço ativo."
    assert client.head("/api/ping").status_code == 200


def test_maintenance_endpoint(client, mock_store):
    mock_store.get_last_maintenance.return_value = None

    response = client.get("/api/maintenance")

    assert response.status_code == 200
    assert response.text == "Manutenção concluída com sucesso (Supabase)."
    assert client.head("/api/maintenance").status_code == 200


def test_unknown_route(client):
    response = client.get("/api/nao-existe")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Endpoint não encontrado. Verifique se o prefixo /api/ está correto.",
    }


def test_store_errors_become_json(client, mock_store):
    mock_store.list_shops.side_effect = StoreError("relation does not exist", code="42P01")

    response = client.get("/api/barbearias")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "relation does not exist"}
