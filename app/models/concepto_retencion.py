"""ConceptoRetencion model — withholding-tax concept catalog."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class ConceptoRetencion(Base):
    """Withholding rule: a rate applied over a minimum taxable base.

    Attributes:
        id: Primary key.
        codigo: Unique 3-character code, e.g. "001".
        nombre: Concept description (max 100 chars).
        base_minima: Minimum base in pesos for the concept to apply.
        tarifa: Rate as a percentage (0–100), e.g. 2.5.
        cuenta_contable: Code of the liability account credited, e.g. "236540".
        activo: Soft-delete flag; inactive concepts are never calculated.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "concepto_retencion"
    __table_args__ = (
        CheckConstraint("tarifa >= 0 AND tarifa <= 100", name="ck_concepto_tarifa"),
        CheckConstraint("base_minima >= 0", name="ck_concepto_base_minima"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(3), unique=True, nullable=False)
    nombre = Column(String(100), nullable=False)
    base_minima = Column(Numeric(15, 2), default=0, nullable=False)
    tarifa = Column(Numeric(5, 2), nullable=False)
    cuenta_contable = Column(String(20), nullable=True)
    activo = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
