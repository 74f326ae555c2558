"""API tests for /api/retenciones (calculator and NIT check digit)."""

import logging

import pytest

from app.models import ConceptoRetencion, Empresa, Proveedor, ProveedorConcepto

URL = "/api/retenciones/calcular"


@pytest.fixture()
def proveedor(db_session, concepto_ids):
    """Supplier with honorarios (11 %, no minimum) then servicios (4 %, 2 UVT)."""
    proveedor = Proveedor(
        tipo_documento="NIT",
        numero_documento="901456789",
        digito_verificacion="8",
        nombre="ASESORÍAS CONTABLES Y TRIBUTARIAS SAS",
        tipo_persona="JURIDICA",
        tipo_transaccion_principal="SERVICIOS",
        activo=True,
    )
    for orden, codigo in enumerate(["005", "003"], start=1):
        proveedor.asignaciones.append(
            ProveedorConcepto(
                concepto_id=concepto_ids[codigo], tipo_transaccion="SERVICIOS", orden=orden
            )
        )
    proveedor.asignaciones.append(
        ProveedorConcepto(concepto_id=concepto_ids["001"], tipo_transaccion="BIENES", orden=1)
    )
    db_session.add(proveedor)
    db_session.commit()
    db_session.refresh(proveedor)
    return proveedor


def _calcular(client, headers, **payload):
    return client.post(URL, json=payload, headers=headers)


def test_services_withholding_with_totals_and_entries(
    client, contador_headers, proveedor, empresa
):
    response = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id,
        base=5_000_000, tipo_transaccion="SERVICIOS",
    )
    assert response.status_code == 200, response.text
    body = response.json()

    assert body["es_agente_retenedor"] is True
    assert [r["concepto_codigo"] for r in body["resultados"]] == ["005", "003"]
    assert [r["valor_retenido"] for r in body["resultados"]] == [550000, 200000]
    assert all(r["aplica"] for r in body["resultados"])
    assert body["total_retenido"] == 750000
    assert body["neto_a_pagar"] == 4250000
    assert [(a["cuenta_contable"], a["credito"]) for a in body["asientos"]] == [
        ("236515", 550000),
        ("236525", 200000),
    ]
    assert body["referencias_no_resueltas"] == []


def test_concept_below_minimum_is_listed_without_amount(
    client, contador_headers, proveedor, empresa
):
    body = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id,
        base=50_000, tipo_transaccion="SERVICIOS",
    ).json()

    honorarios, servicios = body["resultados"]
    assert honorarios["valor_retenido"] == 5500
    assert servicios["aplica"] is False
    assert servicios["valor_retenido"] == 0
    assert servicios["motivo"] == "base amount below minimum threshold"
    assert body["total_retenido"] == 5500
    assert [a["concepto_codigo"] for a in body["asientos"]] == ["005"]


def test_goods_use_goods_list(client, contador_headers, proveedor, empresa):
    body = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id,
        base=1_000_001, tipo_transaccion="BIENES",
    ).json()
    assert [r["concepto_codigo"] for r in body["resultados"]] == ["001"]
    assert body["resultados"][0]["valor_retenido"] == 25000
    assert body["resultados"][0]["cuenta_contable"] == "236540"


def test_company_defaults_to_users_company(client, contador_headers, proveedor, empresa):
    body = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, base=5_000_000, tipo_transaccion="SERVICIOS",
    ).json()
    assert body["empresa_id"] == empresa.id


def test_missing_company_is_rejected(client, admin_headers, proveedor):
    response = _calcular(
        client, admin_headers,
        proveedor_id=proveedor.id, base=5_000_000, tipo_transaccion="SERVICIOS",
    )
    assert response.status_code == 422


def test_unknown_supplier_or_company(client, contador_headers, proveedor, empresa):
    assert _calcular(
        client, contador_headers,
        proveedor_id=9999, empresa_id=empresa.id, base=1, tipo_transaccion="BIENES",
    ).status_code == 404
    assert _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=9999, base=1, tipo_transaccion="BIENES",
    ).status_code == 404


def test_inactive_company_is_rejected(client, admin_headers, proveedor, empresa, db_session):
    empresa.activo = False
    db_session.commit()

    response = _calcular(
        client, admin_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id,
        base=5_000_000, tipo_transaccion="SERVICIOS",
    )
    assert response.status_code == 422
    assert "inactiva" in response.json()["detail"]


def test_non_agent_company_withholds_nothing(client, contador_headers, proveedor, db_session):
    empresa = Empresa(
        numero_documento="860034313", digito_verificacion="7",
        nombre="PEQUEÑA EMPRESA SAS", es_agente_retenedor=False, activo=True,
    )
    db_session.add(empresa)
    db_session.commit()

    body = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id,
        base=5_000_000, tipo_transaccion="SERVICIOS",
    ).json()
    assert body["es_agente_retenedor"] is False
    assert body["resultados"] == []
    assert body["total_retenido"] == 0
    assert body["neto_a_pagar"] == 5_000_000


@pytest.mark.parametrize(
    "base, tipo",
    [
        (-100, "SERVICIOS"),
        (1000, "AMBOS"),
        ("abc", "BIENES"),
        ("1e30", "SERVICIOS"),
        ("1000.005", "SERVICIOS"),
    ],
)
def test_invalid_input_is_422(client, contador_headers, proveedor, empresa, base, tipo):
    response = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id, base=base, tipo_transaccion=tipo,
    )
    assert response.status_code == 422


def test_largest_accepted_base(client, contador_headers, proveedor, empresa):
    response = _calcular(
        client, contador_headers,
        proveedor_id=proveedor.id, empresa_id=empresa.id,
        base="9999999999999999.99", tipo_transaccion="SERVICIOS",
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert [r["valor_retenido"] for r in body["resultados"]] == [
        1100000000000000,
        400000000000000,
    ]
    assert body["total_retenido"] == 1500000000000000


def test_stale_assignment_is_skipped_and_logged(
    client, contador_headers, proveedor, empresa, db_session, concepto_ids, caplog
):
    concepto = db_session.get(ConceptoRetencion, concepto_ids["005"])
    concepto.activo = False
    db_session.commit()

    with caplog.at_level(logging.WARNING, logger="app.services.retencion_service"):
        body = _calcular(
            client, contador_headers,
            proveedor_id=proveedor.id, empresa_id=empresa.id,
            base=5_000_000, tipo_transaccion="SERVICIOS",
        ).json()

    assert [r["concepto_codigo"] for r in body["resultados"]] == ["003"]
    assert body["referencias_no_resueltas"] == [str(concepto_ids["005"])]
    assert any("no existe o está inactivo" in rec.getMessage() for rec in caplog.records)


def test_nit_check_digit_endpoint(client, consulta_headers):
    response = client.get("/api/retenciones/nit/800.197.268/dv", headers=consulta_headers)
    assert response.status_code == 200
    assert response.json() == {
        "numero": "800197268",
        "digito_verificacion": "4",
        "nit": "800197268-4",
        "nit_formateado": "800.197.268-4",
    }


def test_nit_without_digits_is_422(client, consulta_headers):
    assert client.get("/api/retenciones/nit/abc/dv", headers=consulta_headers).status_code == 422
