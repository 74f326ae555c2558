"""API tests for /api/datos-maestros."""

URL = "/api/datos-maestros"


def test_regimenes(client, consulta_headers):
    body = client.get(f"{URL}/regimenes-tributarios", headers=consulta_headers).json()
    assert len(body) == 6
    assert "GRAN_CONTRIBUYENTE" in {r["codigo"] for r in body}


def test_cuentas_filtered_by_type(client, consulta_headers):
    pasivos = client.get(
        f"{URL}/cuentas-contables", params={"tipo": "PASIVO"}, headers=consulta_headers
    ).json()
    assert len(pasivos) == 7
    assert pasivos[0]["codigo"] == "2365"

    gastos = client.get(
        f"{URL}/cuentas-contables", params={"tipo": "GASTO"}, headers=consulta_headers
    ).json()
    assert gastos == []


def test_create_cuenta(client, contador_headers):
    response = client.post(
        f"{URL}/cuentas-contables",
        json={"codigo": "236545", "nombre": "Otras retenciones", "tipo": "PASIVO", "padre_codigo": "2365"},
        headers=contador_headers,
    )
    assert response.status_code == 201
    assert response.json()["nivel"] == 6


def test_create_cuenta_validations(client, contador_headers):
    duplicada = {"codigo": "2365", "nombre": "Repetida", "tipo": "PASIVO"}
    assert client.post(
        f"{URL}/cuentas-contables", json=duplicada, headers=contador_headers
    ).status_code == 409

    mal_padre = {"codigo": "510505", "nombre": "Sueldos", "tipo": "GASTO", "padre_codigo": "2365"}
    assert client.post(
        f"{URL}/cuentas-contables", json=mal_padre, headers=contador_headers
    ).status_code == 422


def test_create_empresa_computes_check_digit(client, contador_headers):
    response = client.post(
        f"{URL}/empresas",
        json={"numero_documento": "860.034.313", "nombre": "DISTRIBUIDORA DEL NORTE SAS"},
        headers=contador_headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["nit"] == "860034313-7"
    assert body["es_agente_retenedor"] is True

    empresas = client.get(f"{URL}/empresas", headers=contador_headers).json()
    assert {e["numero_documento"] for e in empresas} == {"900123456", "860034313"}


def test_create_empresa_rejects_bad_digit_and_duplicate(client, contador_headers, empresa):
    assert client.post(
        f"{URL}/empresas",
        json={"numero_documento": "860034313", "digito_verificacion": "1", "nombre": "X SAS"},
        headers=contador_headers,
    ).status_code == 422
    assert client.post(
        f"{URL}/empresas",
        json={"numero_documento": "900.123.456", "nombre": "COPIA SAS"},
        headers=contador_headers,
    ).status_code == 409


def test_static_catalogs(client, consulta_headers):
    tipos = client.get(f"{URL}/tipos-documento", headers=consulta_headers).json()
    assert "NIT" in {t["codigo"] for t in tipos}

    departamentos = client.get(f"{URL}/departamentos", headers=consulta_headers).json()
    assert len(departamentos) == 33
    assert departamentos[0]["nombre"] == "Amazonas"

    ciudades = client.get(
        f"{URL}/ciudades", params={"departamento_codigo": "05"}, headers=consulta_headers
    ).json()
    assert [c["nombre"] for c in ciudades] == ["Medellín"]
    assert ciudades[0]["departamento"] == "Antioquia"


def test_requires_token(client):
    assert client.get(f"{URL}/departamentos").status_code == 401
