"""ProveedorConcepto model — ordered supplier ↔ retention-concept assignment."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.database import Base


class ProveedorConcepto(Base):
    """One retention concept assigned to a supplier for goods or services.

    A supplier keeps two independent ordered lists (BIENES and SERVICIOS);
    ``orden`` is the position inside its list and drives the order of the
    calculator's results.

    Attributes:
        proveedor_id: FK to Proveedor (part of PK).
        concepto_id: FK to ConceptoRetencion (part of PK).
        tipo_transaccion: "BIENES" or "SERVICIOS" (part of PK).
        orden: 1-based position within the supplier's list for that type.
    """

    __tablename__ = "proveedor_concepto"

    proveedor_id = Column(
        Integer, ForeignKey("proveedor.id", ondelete="CASCADE"), primary_key=True
    )
    concepto_id = Column(
        Integer, ForeignKey("concepto_retencion.id", ondelete="CASCADE"), primary_key=True
    )
    tipo_transaccion = Column(String(10), primary_key=True)  # "BIENES", "SERVICIOS"
    orden = Column(Integer, nullable=False, default=1)

    proveedor = relationship("Proveedor", back_populates="asignaciones", lazy="select")
    concepto = relationship("ConceptoRetencion", lazy="joined")
