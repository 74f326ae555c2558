"""SQLAlchemy models package for the supplier and withholding backend.

Importing all models here ensures that SQLAlchemy's mapper registry is
populated before ``Base.metadata.create_all()`` or Alembic migrations run.
The import order follows the foreign-key dependency graph so that parent
tables are always registered before their children.

Usage from other modules:
    from app.models import Proveedor, ConceptoRetencion
"""

# Reference data (no FK dependencies on other domain models)
from app.models.regimen_tributario import RegimenTributario  # noqa: F401
from app.models.cuenta_contable import CuentaContable  # noqa: F401
from app.models.concepto_retencion import ConceptoRetencion  # noqa: F401

# Companies and suppliers
from app.models.empresa import Empresa  # noqa: F401
from app.models.proveedor import Proveedor  # noqa: F401
from app.models.proveedor_concepto import ProveedorConcepto  # noqa: F401

# Cross-cutting concerns
from app.models.usuario import Usuario  # noqa: F401

__all__ = [
    "RegimenTributario",
    "CuentaContable",
    "ConceptoRetencion",
    "Empresa",
    "Proveedor",
    "ProveedorConcepto",
    "Usuario",
]
