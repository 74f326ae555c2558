"""CuentaContable model — chart of accounts (PUC) entries."""

from sqlalchemy import Boolean, Column, Integer, String

from app.database import Base


class CuentaContable(Base):
    """Accounting account used to annotate withholding results.

    Attributes:
        id: Primary key.
        codigo: Unique PUC code, e.g. "236540".
        nombre: Account name.
        tipo: "ACTIVO", "PASIVO", "PATRIMONIO", "INGRESO", "GASTO" or "COSTO".
        nivel: Depth in the chart (digits of the code, 1–8).
        padre_codigo: Code of the parent account, if any.
        activo: Soft-delete flag.
    """

    __tablename__ = "cuenta_contable"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo = Column(String(20), unique=True, nullable=False)
    nombre = Column(String(200), nullable=False)
    tipo = Column(String(20), nullable=False)
    nivel = Column(Integer, default=1, nullable=False)
    padre_codigo = Column(String(20), nullable=True)
    activo = Column(Boolean, default=True, nullable=False)
