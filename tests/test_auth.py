"""Tests for /api/auth and the health check."""

from app.utils.security import create_access_token, verify_token


def _login(client, username="admin", password="Admin123!"):
    return client.post(
        "/api/auth/login", data={"username": username, "password": password}
    )


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_login_and_me(client):
    response = _login(client)
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "admin"
    assert me.json()["rol"] == "ADMIN"


def test_login_wrong_password(client):
    assert _login(client, password="incorrecta").status_code == 401
    assert _login(client, username="nadie").status_code == 401


def test_refresh_returns_new_token(client, admin_headers):
    response = client.post("/api/auth/refresh", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["access_token"]


def test_invalid_or_foreign_tokens_are_rejected(client):
    assert client.get(
        "/api/auth/me", headers={"Authorization": "Bearer no-es-un-jwt"}
    ).status_code == 401

    sin_usuario = create_access_token({"sub": "9999"})
    assert client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {sin_usuario}"}
    ).status_code == 401


def test_inactive_user_cannot_use_token(client, db_session, admin_headers):
    from app.models import Usuario

    admin = db_session.query(Usuario).filter(Usuario.username == "admin").one()
    admin.activo = False
    db_session.commit()

    assert client.get("/api/auth/me", headers=admin_headers).status_code == 401


def test_token_carries_company_claims(contador_headers, admin_headers, empresa):
    payload = verify_token(contador_headers["Authorization"].split()[1])
    assert payload["rol"] == "CONTABILIDAD"
    assert payload["empresa_id"] == empresa.id
    assert payload["empresa_nit"] == "900123456-8"

    admin = verify_token(admin_headers["Authorization"].split()[1])
    assert admin["empresa_id"] is None
    assert "empresa_nit" not in admin


def test_user_of_inactive_company_is_locked_out(client, db_session, contador_headers, empresa):
    assert _login(client, "contador", "Secreto123!").status_code == 200

    empresa.activo = False
    db_session.commit()

    assert client.get("/api/auth/me", headers=contador_headers).status_code == 403
    assert _login(client, "contador", "Secreto123!").status_code == 401
