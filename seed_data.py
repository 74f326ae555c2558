"""Seed data script for the supplier and withholding database.

Populates the database with demo data for development: the reference
catalogs (regimes, withholding accounts, DIAN concepts, admin user), one
paying company, a few users and a set of suppliers with their retention
assignments.  The script is idempotent: it checks for existing records
before inserting.

Usage (from the repository root):
    python seed_data.py
"""

from __future__ import annotations

import os
import sys

# Ensure the package is importable when running from the repository root
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.core.nit import compute_check_digit  # noqa: E402
from app.database import Base, SessionLocal, engine  # noqa: E402
from app.models import (  # noqa: E402
    ConceptoRetencion,
    Empresa,
    Proveedor,
    ProveedorConcepto,
    RegimenTributario,
    Usuario,
)
from app.services.seed_service import seed_reference_data  # noqa: E402
from app.utils.constants import CIUDADES_POR_CODIGO, DEPARTAMENTOS_POR_CODIGO  # noqa: E402
from app.utils.security import hash_password  # noqa: E402

# ---------------------------------------------------------------------------
# Demo records
# ---------------------------------------------------------------------------

EMPRESA_DEMO = {
    "numero_documento": "900123456",
    "nombre": "COMERCIALIZADORA ANDINA SAS",
    "regimen": "PERSONA_JURIDICA",
    "es_agente_retenedor": True,
    "municipio": "Bogotá D.C.",
}

USUARIOS_DEMO = [
    ("contador", "contador@erp.local", "Laura Gómez", "CONTABILIDAD"),
    ("compras", "compras@erp.local", "Andrés Rojas", "COMPRAS"),
    ("consulta", "consulta@erp.local", "Usuario de Consulta", "CONSULTA"),
]

# (documento, nombre, ciudad, régimen, declarante, persona, transacción,
#  autoretenedor, conceptos bienes, conceptos servicios)
PROVEEDORES_DEMO = [
    ("800197268", "SUMINISTROS INDUSTRIALES SAS", "11001", "PERSONA_JURIDICA", True, "JURIDICA", "BIENES", False, ["001"], []),
    ("860034313", "TRANSPORTES DEL VALLE LTDA", "76001", "PERSONA_JURIDICA", True, "JURIDICA", "SERVICIOS", False, [], ["009"]),
    ("901456789", "ASESORÍAS CONTABLES Y TRIBUTARIAS SAS", "05001", "PERSONA_JURIDICA", True, "JURIDICA", "SERVICIOS", False, [], ["005", "003"]),
    ("79845123", "CARLOS ANDRÉS MARTÍNEZ", "11001", "PERSONA_NATURAL", False, "NATURAL", "SERVICIOS", False, [], ["006", "004"]),
    ("890900608", "ALMACENES ÉXITO SA", "05001", "GRAN_CONTRIBUYENTE", True, "JURIDICA", "BIENES", True, ["001"], []),
    ("900654321", "VIGILANCIA Y ASEO INTEGRAL SAS", "08001", "PERSONA_JURIDICA", True, "JURIDICA", "AMBOS", False, ["001"], ["012"]),
    ("830112233", "INMOBILIARIA LOS ANDES SAS", "11001", "PERSONA_JURIDICA", True, "JURIDICA", "SERVICIOS", False, [], ["007"]),
    ("52345678", "MARÍA FERNANDA LÓPEZ", "68001", "REGIMEN_SIMPLE", True, "NATURAL", "BIENES", False, ["002"], []),
]


# ---------------------------------------------------------------------------
# Seed functions
# ---------------------------------------------------------------------------


def seed_empresa(session) -> Empresa:
    empresa = (
        session.query(Empresa)
        .filter(Empresa.numero_documento == EMPRESA_DEMO["numero_documento"])
        .first()
    )
    if empresa is not None:
        print("  [SKIP] Empresa demo ya existe.")
        return empresa

    regimen = (
        session.query(RegimenTributario)
        .filter(RegimenTributario.codigo == EMPRESA_DEMO["regimen"])
        .first()
    )
    empresa = Empresa(
        numero_documento=EMPRESA_DEMO["numero_documento"],
        digito_verificacion=compute_check_digit(EMPRESA_DEMO["numero_documento"]),
        nombre=EMPRESA_DEMO["nombre"],
        regimen_tributario_id=regimen.id if regimen else None,
        es_agente_retenedor=EMPRESA_DEMO["es_agente_retenedor"],
        municipio=EMPRESA_DEMO["municipio"],
        activo=True,
    )
    session.add(empresa)
    session.flush()
    print(f"  [OK] Empresa {empresa.nit} {empresa.nombre}")
    return empresa


def seed_usuarios(session, empresa: Empresa) -> None:
    for username, email, nombre, rol in USUARIOS_DEMO:
        if session.query(Usuario).filter(Usuario.username == username).first():
            print(f"  [SKIP] Usuario '{username}' ya existe.")
            continue
        session.add(
            Usuario(
                username=username,
                email=email,
                password_hash=hash_password("Demo1234!"),
                nombre_completo=nombre,
                rol=rol,
                empresa_id=empresa.id,
                activo=True,
            )
        )
        print(f"  [OK] Usuario '{username}' ({rol}) / Demo1234!")


def seed_proveedores(session) -> None:
    regimenes = {r.codigo: r for r in session.query(RegimenTributario).all()}
    conceptos = {c.codigo: c for c in session.query(ConceptoRetencion).all()}

    for (
        documento, nombre, ciudad_codigo, regimen, declarante, persona,
        transaccion, autoretenedor, bienes, servicios,
    ) in PROVEEDORES_DEMO:
        if session.query(Proveedor).filter(Proveedor.numero_documento == documento).first():
            print(f"  [SKIP] Proveedor {documento} ya existe.")
            continue

        ciudad = CIUDADES_POR_CODIGO[ciudad_codigo]
        proveedor = Proveedor(
            tipo_documento="NIT",
            numero_documento=documento,
            digito_verificacion=compute_check_digit(documento),
            nombre=nombre,
            ciudad_codigo=ciudad_codigo,
            ciudad=ciudad["nombre"],
            departamento_codigo=ciudad["departamento_codigo"],
            departamento=DEPARTAMENTOS_POR_CODIGO.get(ciudad["departamento_codigo"]),
            plazo_pago_dias=30,
            regimen_tributario_id=regimenes[regimen].id if regimen in regimenes else None,
            responsabilidad_iva="RESPONSABLE" if declarante else "NO_RESPONSABLE",
            autoretenedor=autoretenedor,
            declarante_renta=declarante,
            tipo_persona=persona,
            tipo_transaccion_principal=transaccion,
            activo=True,
        )
        for tipo, codigos in (("BIENES", bienes), ("SERVICIOS", servicios)):
            for orden, codigo in enumerate(codigos, start=1):
                proveedor.asignaciones.append(
                    ProveedorConcepto(
                        concepto=conceptos[codigo],
                        tipo_transaccion=tipo,
                        orden=orden,
                    )
                )
        session.add(proveedor)
        print(f"  [OK] Proveedor {proveedor.nit} {nombre}")


def main() -> None:
    """Run the complete seed process within a single database transaction."""
    print("=" * 60)
    print("  ERP Proveedores y Retenciones — Seed Data Script")
    print("=" * 60)

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        print("\n[1/4] Catálogos de referencia y administrador...")
        seed_reference_data(session)

        print("\n[2/4] Empresa pagadora...")
        empresa = seed_empresa(session)

        print("\n[3/4] Usuarios...")
        seed_usuarios(session, empresa)

        print("\n[4/4] Proveedores...")
        seed_proveedores(session)

        session.commit()
        print("\n" + "=" * 60)
        print("  Seed completado exitosamente.")
        print("=" * 60)

    except Exception as exc:
        session.rollback()
        print("\n[ERROR] Seed fallido — se hizo rollback.")
        print(f"  Detalle: {exc}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
