"""Tests for the Excel export of suppliers."""

import io

from openpyxl import load_workbook

from app.models import Proveedor, ProveedorConcepto


def _proveedor(db_session, concepto_ids):
    proveedor = Proveedor(
        tipo_documento="NIT",
        numero_documento="800197268",
        digito_verificacion="4",
        nombre="SUMINISTROS INDUSTRIALES SAS",
        ciudad="Bogotá D.C.",
        activo=True,
    )
    proveedor.asignaciones.append(
        ProveedorConcepto(concepto_id=concepto_ids["001"], tipo_transaccion="BIENES", orden=1)
    )
    db_session.add(proveedor)
    db_session.commit()


def test_export_workbook(client, consulta_headers, db_session, concepto_ids):
    _proveedor(db_session, concepto_ids)

    response = client.get("/api/exportar/proveedores.xlsx", headers=consulta_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "attachment" in response.headers["content-disposition"]
    assert response.content[:2] == b"PK"

    workbook = load_workbook(io.BytesIO(response.content))
    assert workbook.sheetnames == ["Proveedores", "Conceptos"]

    valores = [
        cell for row in workbook["Proveedores"].iter_rows(values_only=True) for cell in row
    ]
    assert "800.197.268-4" in valores
    assert "001" in valores

    codigos = [
        cell for row in workbook["Conceptos"].iter_rows(values_only=True) for cell in row
    ]
    assert "012" in codigos


def test_export_requires_token(client):
    assert client.get("/api/exportar/proveedores.xlsx").status_code == 401
