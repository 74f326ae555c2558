"""RegimenTributario model — tax regime reference data."""

from sqlalchemy import Boolean, Column, Integer, String

from app.database import Base


class RegimenTributario(Base):
    """Tax regime a supplier or company belongs to.

    Attributes:
        id: Primary key.
        codigo: Unique code, e.g. "DECLARANTE".
        nombre: Display name.
        es_declarante: Whether members file income tax.
        aplica_iva: Whether members charge VAT.
        activo: Soft-delete flag.
    """

    __tablename__ = "regimen_tributario"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(30), unique=True, nullable=False)
    nombre = Column(String(100), nullable=False)
    es_declarante = Column(Boolean, default=False, nullable=False)
    aplica_iva = Column(Boolean, default=False, nullable=False)
    activo = Column(Boolean, default=True, nullable=False)
