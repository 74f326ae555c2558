"""API tests for /api/proveedores."""

URL = "/api/proveedores"


def _payload(**overrides):
    data = {
        "numero_documento": "800.197.268",
        "nombre": "SUMINISTROS INDUSTRIALES SAS",
        "email": "compras@suministros.com.co",
        "telefono": "6013456789",
        "ciudad_codigo": "11001",
        "tipo_persona": "JURIDICA",
        "tipo_transaccion_principal": "BIENES",
    }
    data.update(overrides)
    return data


def _crear(client, headers, **overrides):
    response = client.post(URL, json=_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_requires_token(client):
    assert client.get(URL).status_code == 401


def test_create_computes_check_digit_and_city(client, compras_headers):
    body = _crear(client, compras_headers)

    assert body["numero_documento"] == "800197268"
    assert body["digito_verificacion"] == "4"
    assert body["nit"] == "800197268-4"
    assert body["nit_formateado"] == "800.197.268-4"
    assert body["ciudad"] == "Bogotá D.C."
    assert body["departamento_codigo"] == "11"
    assert body["activo"] is True
    assert body["conceptos_bienes"] == []


def test_create_accepts_matching_check_digit(client, compras_headers):
    body = _crear(client, compras_headers, digito_verificacion="4")
    assert body["nit"] == "800197268-4"


def test_create_rejects_wrong_check_digit(client, compras_headers):
    response = client.post(URL, json=_payload(digito_verificacion="5"), headers=compras_headers)
    assert response.status_code == 422
    assert "corresponde 4" in response.json()["detail"]


def test_create_non_nit_document_has_no_check_digit(client, compras_headers):
    body = _crear(
        client, compras_headers,
        tipo_documento="CC", numero_documento="79845123",
        nombre="CARLOS ANDRÉS MARTÍNEZ", tipo_persona="NATURAL",
    )
    assert body["digito_verificacion"] is None
    assert body["nit"] == "79845123"


def test_create_duplicate_document_conflicts(client, compras_headers):
    _crear(client, compras_headers)
    response = client.post(
        URL, json=_payload(numero_documento="800197268", nombre="OTRO"), headers=compras_headers
    )
    assert response.status_code == 409


def test_create_rejects_unknown_city_and_concepts(client, compras_headers):
    assert client.post(
        URL, json=_payload(ciudad_codigo="99999"), headers=compras_headers
    ).status_code == 422
    assert client.post(
        URL, json=_payload(conceptos_bienes=[9999]), headers=compras_headers
    ).status_code == 422


def test_create_with_ordered_assignments(client, compras_headers, concepto_ids):
    body = _crear(
        client, compras_headers,
        conceptos_servicios=[concepto_ids["005"], concepto_ids["003"]],
        conceptos_bienes=[concepto_ids["001"]],
    )
    assert [c["codigo"] for c in body["conceptos_servicios"]] == ["005", "003"]
    assert [c["codigo"] for c in body["conceptos_bienes"]] == ["001"]


def test_consulta_role_cannot_write(client, consulta_headers):
    assert client.post(URL, json=_payload(), headers=consulta_headers).status_code == 403


def test_list_search_and_pagination(client, compras_headers):
    _crear(client, compras_headers)
    _crear(
        client, compras_headers,
        numero_documento="860034313", nombre="TRANSPORTES DEL VALLE LTDA",
        email="info@transvalle.com.co", ciudad_codigo="76001",
    )

    body = client.get(URL, headers=compras_headers).json()
    assert body["total"] == 2
    assert [p["nombre"] for p in body["items"]] == [
        "SUMINISTROS INDUSTRIALES SAS",
        "TRANSPORTES DEL VALLE LTDA",
    ]

    by_nit = client.get(URL, params={"q": "800.197"}, headers=compras_headers).json()
    assert [p["numero_documento"] for p in by_nit["items"]] == ["800197268"]

    by_city = client.get(URL, params={"q": "cali"}, headers=compras_headers).json()
    assert by_city["total"] == 1

    page = client.get(URL, params={"page": 2, "page_size": 1}, headers=compras_headers).json()
    assert page["total"] == 2
    assert page["page"] == 2
    assert [p["numero_documento"] for p in page["items"]] == ["860034313"]


def test_get_unknown_returns_404(client, compras_headers):
    assert client.get(f"{URL}/999", headers=compras_headers).status_code == 404


def test_update_recomputes_check_digit(client, compras_headers):
    proveedor = _crear(client, compras_headers)
    response = client.put(
        f"{URL}/{proveedor['id']}",
        json={"numero_documento": "890900608", "plazo_pago_dias": 60},
        headers=compras_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["nit"] == "890900608-9"
    assert body["plazo_pago_dias"] == 60
    assert body["nombre"] == "SUMINISTROS INDUSTRIALES SAS"


def test_update_null_on_required_field_is_ignored(client, compras_headers):
    proveedor = _crear(client, compras_headers)
    response = client.put(
        f"{URL}/{proveedor['id']}",
        json={"nombre": None, "email": None},
        headers=compras_headers,
    )
    assert response.status_code == 200
    assert response.json()["nombre"] == "SUMINISTROS INDUSTRIALES SAS"
    assert response.json()["email"] is None


def test_delete_is_soft(client, compras_headers):
    proveedor = _crear(client, compras_headers)
    response = client.delete(f"{URL}/{proveedor['id']}", headers=compras_headers)
    assert response.status_code == 200
    assert response.json()["activo"] is False

    activos = client.get(URL, params={"activo": True}, headers=compras_headers).json()
    assert activos["total"] == 0
    assert client.get(f"{URL}/{proveedor['id']}", headers=compras_headers).status_code == 200


def test_replace_retention_assignments(client, compras_headers, concepto_ids):
    proveedor = _crear(client, compras_headers, conceptos_servicios=[concepto_ids["004"]])
    response = client.put(
        f"{URL}/{proveedor['id']}/retenciones",
        json={
            "conceptos_servicios": [concepto_ids["005"], concepto_ids["003"], concepto_ids["005"]],
        },
        headers=compras_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert [c["codigo"] for c in body["conceptos_servicios"]] == ["005", "003"]
    assert body["conceptos_bienes"] == []


def test_inactive_concept_cannot_be_assigned(client, compras_headers, db_session, concepto_ids):
    from app.models import ConceptoRetencion

    concepto = db_session.get(ConceptoRetencion, concepto_ids["008"])
    concepto.activo = False
    db_session.commit()

    proveedor = _crear(client, compras_headers)
    response = client.put(
        f"{URL}/{proveedor['id']}/retenciones",
        json={"conceptos_bienes": [concepto_ids["008"]]},
        headers=compras_headers,
    )
    assert response.status_code == 422
    assert str(concepto_ids["008"]) in response.json()["detail"]


def test_bulk_assign_and_remove(client, compras_headers, concepto_ids):
    uno = _crear(client, compras_headers, conceptos_servicios=[concepto_ids["005"]])
    dos = _crear(
        client, compras_headers,
        numero_documento="860034313", nombre="TRANSPORTES DEL VALLE LTDA",
    )

    response = client.post(
        f"{URL}/asignacion-masiva",
        json={
            "proveedor_ids": [uno["id"], dos["id"]],
            "concepto_ids": [concepto_ids["005"], concepto_ids["012"]],
            "tipo_transaccion": "SERVICIOS",
            "accion": "ASIGNAR",
        },
        headers=compras_headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "accion": "ASIGNAR",
        "proveedores_actualizados": 2,
        "asignaciones_creadas": 3,
        "asignaciones_eliminadas": 0,
    }
    detalle = client.get(f"{URL}/{uno['id']}", headers=compras_headers).json()
    assert [c["codigo"] for c in detalle["conceptos_servicios"]] == ["005", "012"]

    response = client.post(
        f"{URL}/asignacion-masiva",
        json={
            "proveedor_ids": [uno["id"], dos["id"]],
            "concepto_ids": [concepto_ids["005"]],
            "accion": "REMOVER",
        },
        headers=compras_headers,
    )
    assert response.status_code == 200
    assert response.json()["asignaciones_eliminadas"] == 2
    detalle = client.get(f"{URL}/{uno['id']}", headers=compras_headers).json()
    assert [c["codigo"] for c in detalle["conceptos_servicios"]] == ["012"]


def test_bulk_assign_unknown_supplier_is_404(client, compras_headers, concepto_ids):
    response = client.post(
        f"{URL}/asignacion-masiva",
        json={"proveedor_ids": [4242], "concepto_ids": [concepto_ids["001"]], "accion": "ASIGNAR"},
        headers=compras_headers,
    )
    assert response.status_code == 404
