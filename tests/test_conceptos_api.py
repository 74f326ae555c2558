"""API tests for /api/conceptos-retencion."""

URL = "/api/conceptos-retencion"

NUEVO = {
    "codigo": "013",
    "nombre": "Servicios de vigilancia",
    "base_minima": 99598,
    "tarifa": 2,
    "cuenta_contable": "236525",
}


def test_list_seeded_catalog(client, consulta_headers):
    response = client.get(URL, headers=consulta_headers)
    assert response.status_code == 200
    codigos = [c["codigo"] for c in response.json()]
    assert len(codigos) == 12
    assert codigos == sorted(codigos)


def test_list_search(client, consulta_headers):
    body = client.get(URL, params={"q": "honorarios"}, headers=consulta_headers).json()
    assert {c["codigo"] for c in body} == {"005", "006"}


def test_get_concept(client, consulta_headers, concepto_ids):
    body = client.get(f"{URL}/{concepto_ids['001']}", headers=consulta_headers).json()
    assert body["tarifa"] == 2.5
    assert body["base_minima"] == 497990
    assert body["cuenta_contable"] == "236540"
    assert client.get(f"{URL}/9999", headers=consulta_headers).status_code == 404


def test_create_concept(client, contador_headers):
    response = client.post(URL, json=NUEVO, headers=contador_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["codigo"] == "013"
    assert body["tarifa"] == 2
    assert body["activo"] is True


def test_create_duplicate_code_conflicts(client, contador_headers):
    response = client.post(URL, json={**NUEVO, "codigo": "001"}, headers=contador_headers)
    assert response.status_code == 409


def test_create_rejects_unknown_account(client, contador_headers):
    response = client.post(URL, json={**NUEVO, "cuenta_contable": "999999"}, headers=contador_headers)
    assert response.status_code == 422


def test_create_rejects_out_of_range_values(client, contador_headers):
    assert client.post(URL, json={**NUEVO, "tarifa": 150}, headers=contador_headers).status_code == 422
    assert client.post(URL, json={**NUEVO, "base_minima": -1}, headers=contador_headers).status_code == 422
    assert client.post(URL, json={**NUEVO, "codigo": "0001"}, headers=contador_headers).status_code == 422


def test_purchasing_role_cannot_edit_catalog(client, compras_headers):
    assert client.post(URL, json=NUEVO, headers=compras_headers).status_code == 403


def test_update_concept(client, contador_headers, concepto_ids):
    response = client.put(
        f"{URL}/{concepto_ids['003']}",
        json={"tarifa": 6, "nombre": None, "cuenta_contable": None},
        headers=contador_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["tarifa"] == 6
    assert body["nombre"] == "Servicios generales (declarantes renta)"
    assert body["cuenta_contable"] is None


def test_delete_deactivates(client, contador_headers, concepto_ids):
    response = client.delete(f"{URL}/{concepto_ids['012']}", headers=contador_headers)
    assert response.status_code == 200
    assert response.json()["activo"] is False

    activos = client.get(URL, params={"activo": True}, headers=contador_headers).json()
    assert "012" not in {c["codigo"] for c in activos}
