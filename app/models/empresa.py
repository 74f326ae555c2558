"""Empresa model — the paying company (tenant) that may withhold."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class Empresa(Base):
    """Company on whose behalf purchases are paid.

    Only a company flagged ``es_agente_retenedor`` withholds tax from its
    suppliers.

    Attributes:
        id: Primary key.
        numero_documento: NIT number, digits only, unique.
        digito_verificacion: DIAN check digit.
        nombre: Legal name.
        regimen_tributario_id: FK to RegimenTributario.
        es_agente_retenedor: Withholding-agent flag.
        municipio: Municipality where the company pays ICA.
        activo: Soft-delete flag.
    """

    __tablename__ = "empresa"

    id = Column(Integer, primary_key=True, autoincrement=True)
    numero_documento = Column(String(20), unique=True, nullable=False)
    digito_verificacion = Column(String(1), nullable=True)
    nombre = Column(String(300), nullable=False)
    regimen_tributario_id = Column(Integer, ForeignKey("regimen_tributario.id"), nullable=True)
    es_agente_retenedor = Column(Boolean, default=True, nullable=False)
    municipio = Column(String(100), nullable=True)
    activo = Column(Boolean, default=True, nullable=False)

    regimen_tributario = relationship("RegimenTributario", lazy="select")

    @property
    def nit(self) -> str:
        if self.digito_verificacion:
            return f"{self.numero_documento}-{self.digito_verificacion}"
        return self.numero_documento
