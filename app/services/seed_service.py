"""
Startup seeding of reference data.

Idempotent: every function inserts only the rows whose natural key is
missing, so it is safe to run on each boot.  Called from the application
lifespan when ``SEED_ON_STARTUP`` is true, and from ``seed_data.py``.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.concepto_retencion import ConceptoRetencion
from app.models.cuenta_contable import CuentaContable
from app.models.regimen_tributario import RegimenTributario
from app.models.usuario import Usuario
from app.utils.constants import (
    CONCEPTOS_RETENCION_DEFAULT,
    CUENTAS_CONTABLES_DEFAULT,
    REGIMENES_TRIBUTARIOS_DEFAULT,
)
from app.utils.security import hash_password

logger = logging.getLogger(__name__)


def seed_regimenes(db: Session) -> int:
    existentes = {codigo for (codigo,) in db.query(RegimenTributario.codigo).all()}
    nuevos = [
        RegimenTributario(activo=True, **r)
        for r in REGIMENES_TRIBUTARIOS_DEFAULT
        if r["codigo"] not in existentes
    ]
    db.add_all(nuevos)
    return len(nuevos)


def seed_cuentas(db: Session) -> int:
    existentes = {codigo for (codigo,) in db.query(CuentaContable.codigo).all()}
    nuevas = [
        CuentaContable(activo=True, **c)
        for c in CUENTAS_CONTABLES_DEFAULT
        if c["codigo"] not in existentes
    ]
    db.add_all(nuevas)
    return len(nuevas)


def seed_conceptos(db: Session) -> int:
    existentes = {codigo for (codigo,) in db.query(ConceptoRetencion.codigo).all()}
    nuevos = [
        ConceptoRetencion(
            codigo=c["codigo"],
            nombre=c["nombre"],
            base_minima=Decimal(str(c["base_minima"])),
            tarifa=Decimal(str(c["tarifa"])),
            cuenta_contable=c["cuenta_contable"],
            activo=True,
        )
        for c in CONCEPTOS_RETENCION_DEFAULT
        if c["codigo"] not in existentes
    ]
    db.add_all(nuevos)
    return len(nuevos)


def seed_admin(db: Session) -> bool:
    """Create the configured admin user when it does not exist yet."""
    settings = get_settings()
    admin = db.query(Usuario).filter(Usuario.username == settings.ADMIN_USERNAME).first()
    if admin is not None:
        return False
    db.add(
        Usuario(
            username=settings.ADMIN_USERNAME,
            email=settings.ADMIN_EMAIL,
            password_hash=hash_password(settings.ADMIN_PASSWORD),
            nombre_completo="Administrador",
            rol="ADMIN",
            activo=True,
        )
    )
    return True


def seed_reference_data(db: Session) -> None:
    """Ensure regimes, withholding accounts, the concept catalog and the admin exist."""
    regimenes = seed_regimenes(db)
    cuentas = seed_cuentas(db)
    # Concepts reference accounts by code
    db.flush()
    conceptos = seed_conceptos(db)
    admin = seed_admin(db)
    db.commit()
    logger.info(
        "Seed: regimenes=%d cuentas=%d conceptos=%d admin_creado=%s",
        regimenes, cuentas, conceptos, admin,
    )
