"""Proveedor model — supplier registry with withholding profile."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Proveedor(Base):
    """Supplier registered in the ERP, with the flags that drive withholding.

    Attributes:
        id: Primary key.
        tipo_documento: "NIT", "CC", "CE", "PAS", "TI" or "RC".
        numero_documento: Document number, digits only, unique.
        digito_verificacion: DIAN check digit (only for NIT).
        nombre: Legal or full name.
        email: Contact email address.
        telefono: Contact phone number.
        direccion: Physical address.
        ciudad_codigo: DANE city code, e.g. "11001".
        ciudad: City name.
        departamento_codigo: DANE department code, e.g. "11".
        departamento: Department name.
        contacto_principal: Main contact person.
        plazo_pago_dias: Payment terms in days.
        regimen_tributario_id: FK to RegimenTributario.
        responsabilidad_iva: "RESPONSABLE" or "NO_RESPONSABLE".
        autoretenedor: Self-withholder flag.
        declarante_renta: Income-tax filer flag.
        tipo_persona: "NATURAL" or "JURIDICA".
        tipo_transaccion_principal: "BIENES", "SERVICIOS" or "AMBOS".
        inscrito_ica_local: Registered for the local ICA (turnover) tax.
        activo: Soft-delete flag.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "proveedor"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tipo_documento = Column(String(5), default="NIT", nullable=False)
    numero_documento = Column(String(20), unique=True, nullable=False)
    digito_verificacion = Column(String(1), nullable=True)
    nombre = Column(String(300), nullable=False, index=True)
    email = Column(String(200), nullable=True)
    telefono = Column(String(50), nullable=True)
    direccion = Column(String(500), nullable=True)
    ciudad_codigo = Column(String(5), nullable=True)
    ciudad = Column(String(100), nullable=True)
    departamento_codigo = Column(String(2), nullable=True)
    departamento = Column(String(100), nullable=True)
    contacto_principal = Column(String(200), nullable=True)
    plazo_pago_dias = Column(Integer, default=30, nullable=False)
    regimen_tributario_id = Column(Integer, ForeignKey("regimen_tributario.id"), nullable=True)
    responsabilidad_iva = Column(String(20), default="RESPONSABLE", nullable=False)
    autoretenedor = Column(Boolean, default=False, nullable=False)
    declarante_renta = Column(Boolean, default=True, nullable=False)
    tipo_persona = Column(String(10), default="JURIDICA", nullable=False)
    tipo_transaccion_principal = Column(String(10), default="AMBOS", nullable=False)
    inscrito_ica_local = Column(Boolean, default=False, nullable=False)
    activo = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships: string references avoid circular imports at module load time
    regimen_tributario = relationship("RegimenTributario", lazy="select")
    asignaciones = relationship(
        "ProveedorConcepto",
        back_populates="proveedor",
        order_by="ProveedorConcepto.orden",
        lazy="select",
        cascade="all, delete-orphan",
    )

    @property
    def nit(self) -> str:
        """``numero-dv`` when a check digit exists, the bare number otherwise."""
        if self.digito_verificacion:
            return f"{self.numero_documento}-{self.digito_verificacion}"
        return self.numero_documento

    def conceptos_asignados(self, tipo_transaccion: str) -> list:
        """Assigned ``ConceptoRetencion`` rows for BIENES or SERVICIOS, in order."""
        return [
            a.concepto
            for a in sorted(self.asignaciones, key=lambda a: a.orden)
            if a.tipo_transaccion == tipo_transaccion
        ]
