"""API tests for the administrative SQL console (/api/database/execute)."""

import pytest

from app.config import get_settings

URL = "/api/database/execute"


@pytest.fixture()
def consola_habilitada(monkeypatch):
    monkeypatch.setattr(get_settings(), "SQL_CONSOLE_ENABLED", True)


def test_disabled_by_default(client, admin_headers):
    response = client.post(URL, json={"sql": "SELECT 1"}, headers=admin_headers)
    assert response.status_code == 403


def test_admin_only(client, contador_headers, consola_habilitada):
    response = client.post(URL, json={"sql": "SELECT 1"}, headers=contador_headers)
    assert response.status_code == 403


def test_select_returns_rows(client, admin_headers, consola_habilitada):
    response = client.post(
        URL,
        json={"sql": "SELECT codigo, tarifa FROM concepto_retencion ORDER BY codigo;"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["rowCount"] == 12
    assert body["columns"] == ["codigo", "tarifa"]
    assert body["data"][0]["codigo"] == "001"
    assert body["truncated"] is False


def test_select_is_truncated_at_max_rows(client, admin_headers, consola_habilitada, monkeypatch):
    monkeypatch.setattr(get_settings(), "SQL_MAX_ROWS", 5)
    body = client.post(
        URL, json={"sql": "SELECT codigo FROM concepto_retencion"}, headers=admin_headers
    ).json()
    assert body["rowCount"] == 5
    assert body["truncated"] is True


def test_update_reports_row_count(client, admin_headers, consola_habilitada):
    response = client.post(
        URL,
        json={"sql": "UPDATE concepto_retencion SET activo = 0 WHERE codigo IN ('011', '012')"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["rowCount"] == 2


def test_database_error_envelope(client, admin_headers, consola_habilitada):
    response = client.post(URL, json={"sql": "SELECT * FROM tabla_inexistente"}, headers=admin_headers)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "tabla_inexistente" in body["error"]


def test_colon_inside_literal_is_not_a_parameter(client, admin_headers, consola_habilitada):
    actualizar = client.post(
        URL,
        json={"sql": "UPDATE concepto_retencion SET nombre = 'Nota :pendiente' WHERE codigo = '001'"},
        headers=admin_headers,
    )
    assert actualizar.status_code == 200
    assert actualizar.json()["rowCount"] == 1

    response = client.post(
        URL,
        json={"sql": "SELECT codigo FROM concepto_retencion WHERE nombre = 'Nota :pendiente'"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == [{"codigo": "001"}]
