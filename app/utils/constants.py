"""
Application-wide constants for the supplier and withholding backend.

Defines domain enumerations, DIAN 2025 thresholds, default reference
catalogs seeded on startup, and the DANE department/city lookup lists.
"""

from typing import Final

# ---------------------------------------------------------------------------
# User roles
# ---------------------------------------------------------------------------

ROLES: Final[list[str]] = [
    "ADMIN",
    "CONTABILIDAD",
    "COMPRAS",
    "CONSULTA",
]

# Roles allowed to modify suppliers and their retention configuration
ROLES_ESCRITURA: Final[tuple[str, ...]] = ("ADMIN", "CONTABILIDAD", "COMPRAS")
# Roles allowed to modify the concept catalog and accounting data
ROLES_CONTABLES: Final[tuple[str, ...]] = ("ADMIN", "CONTABILIDAD")

# ---------------------------------------------------------------------------
# Supplier enumerations
# ---------------------------------------------------------------------------

TIPOS_DOCUMENTO: Final[dict[str, str]] = {
    "NIT": "NIT - Número de Identificación Tributaria",
    "CC": "CC - Cédula de Ciudadanía",
    "CE": "CE - Cédula de Extranjería",
    "PAS": "PAS - Pasaporte",
    "TI": "TI - Tarjeta de Identidad",
    "RC": "RC - Registro Civil",
}

# ---------------------------------------------------------------------------
# DIAN thresholds (Decreto 0572 de 2025)
# ---------------------------------------------------------------------------

UVT_2025: Final[int] = 49_799
BASE_10_UVT: Final[int] = 10 * UVT_2025   # $497,990: compras, arrendamiento inmuebles
BASE_2_UVT: Final[int] = 2 * UVT_2025     # $99,598: servicios

# ---------------------------------------------------------------------------
# Default catalogs: each row is inserted when its codigo is missing
# ---------------------------------------------------------------------------

REGIMENES_TRIBUTARIOS_DEFAULT: Final[list[dict]] = [
    {"codigo": "DECLARANTE", "nombre": "Declarante de Renta", "es_declarante": True, "aplica_iva": True},
    {"codigo": "NO_DECLARANTE", "nombre": "No Declarante de Renta", "es_declarante": False, "aplica_iva": False},
    {"codigo": "GRAN_CONTRIBUYENTE", "nombre": "Gran Contribuyente", "es_declarante": True, "aplica_iva": True},
    {"codigo": "PERSONA_JURIDICA", "nombre": "Persona Jurídica", "es_declarante": True, "aplica_iva": True},
    {"codigo": "PERSONA_NATURAL", "nombre": "Persona Natural", "es_declarante": False, "aplica_iva": False},
    {"codigo": "REGIMEN_SIMPLE", "nombre": "Régimen Simple de Tributación", "es_declarante": True, "aplica_iva": False},
]

CUENTAS_CONTABLES_DEFAULT: Final[list[dict]] = [
    {"codigo": "2365", "nombre": "Retención en la fuente", "tipo": "PASIVO", "nivel": 4, "padre_codigo": None},
    {"codigo": "236505", "nombre": "Retención en la Fuente - Salarios y pagos laborales", "tipo": "PASIVO", "nivel": 6, "padre_codigo": "2365"},
    {"codigo": "236515", "nombre": "Retención en la Fuente - Honorarios", "tipo": "PASIVO", "nivel": 6, "padre_codigo": "2365"},
    {"codigo": "236520", "nombre": "Retención en la Fuente - Comisiones", "tipo": "PASIVO", "nivel": 6, "padre_codigo": "2365"},
    {"codigo": "236525", "nombre": "Retención en la Fuente - Servicios", "tipo": "PASIVO", "nivel": 6, "padre_codigo": "2365"},
    {"codigo": "236530", "nombre": "Retención en la Fuente - Arrendamientos", "tipo": "PASIVO", "nivel": 6, "padre_codigo": "2365"},
    {"codigo": "236540", "nombre": "Retención en la Fuente - Compras", "tipo": "PASIVO", "nivel": 6, "padre_codigo": "2365"},
]

CONCEPTOS_RETENCION_DEFAULT: Final[list[dict]] = [
    {"codigo": "001", "nombre": "Compras generales (declarantes renta)", "base_minima": BASE_10_UVT, "tarifa": 2.5, "cuenta_contable": "236540"},
    {"codigo": "002", "nombre": "Compras generales (no declarantes renta)", "base_minima": BASE_10_UVT, "tarifa": 3.5, "cuenta_contable": "236540"},
    {"codigo": "003", "nombre": "Servicios generales (declarantes renta)", "base_minima": BASE_2_UVT, "tarifa": 4.0, "cuenta_contable": "236525"},
    {"codigo": "004", "nombre": "Servicios generales (no declarantes renta)", "base_minima": BASE_2_UVT, "tarifa": 6.0, "cuenta_contable": "236525"},
    {"codigo": "005", "nombre": "Honorarios y comisiones (personas jurídicas)", "base_minima": 0, "tarifa": 11.0, "cuenta_contable": "236515"},
    {"codigo": "006", "nombre": "Honorarios y comisiones (no declarantes renta)", "base_minima": 0, "tarifa": 10.0, "cuenta_contable": "236515"},
    {"codigo": "007", "nombre": "Arrendamiento de bienes inmuebles", "base_minima": BASE_10_UVT, "tarifa": 3.5, "cuenta_contable": "236530"},
    {"codigo": "008", "nombre": "Arrendamiento de bienes muebles", "base_minima": 0, "tarifa": 4.0, "cuenta_contable": "236530"},
    {"codigo": "009", "nombre": "Transporte nacional de carga", "base_minima": BASE_2_UVT, "tarifa": 1.0, "cuenta_contable": "236525"},
    {"codigo": "010", "nombre": "Construcción y urbanización", "base_minima": BASE_10_UVT, "tarifa": 2.0, "cuenta_contable": "236525"},
    {"codigo": "011", "nombre": "Servicios de hoteles y restaurantes", "base_minima": BASE_2_UVT, "tarifa": 3.5, "cuenta_contable": "236525"},
    {"codigo": "012", "nombre": "Servicios de vigilancia y aseo", "base_minima": BASE_2_UVT, "tarifa": 2.0, "cuenta_contable": "236525"},
]

# ---------------------------------------------------------------------------
# DANE divisions
# ---------------------------------------------------------------------------

DEPARTAMENTOS: Final[list[dict[str, str]]] = [
    {"codigo": "05", "nombre": "Antioquia"},
    {"codigo": "08", "nombre": "Atlántico"},
    {"codigo": "11", "nombre": "Bogotá D.C."},
    {"codigo": "13", "nombre": "Bolívar"},
    {"codigo": "15", "nombre": "Boyacá"},
    {"codigo": "17", "nombre": "Caldas"},
    {"codigo": "18", "nombre": "Caquetá"},
    {"codigo": "19", "nombre": "Cauca"},
    {"codigo": "20", "nombre": "Cesar"},
    {"codigo": "23", "nombre": "Córdoba"},
    {"codigo": "25", "nombre": "Cundinamarca"},
    {"codigo": "27", "nombre": "Chocó"},
    {"codigo": "41", "nombre": "Huila"},
    {"codigo": "44", "nombre": "La Guajira"},
    {"codigo": "47", "nombre": "Magdalena"},
    {"codigo": "50", "nombre": "Meta"},
    {"codigo": "52", "nombre": "Nariño"},
    {"codigo": "54", "nombre": "Norte de Santander"},
    {"codigo": "63", "nombre": "Quindío"},
    {"codigo": "66", "nombre": "Risaralda"},
    {"codigo": "68", "nombre": "Santander"},
    {"codigo": "70", "nombre": "Sucre"},
    {"codigo": "73", "nombre": "Tolima"},
    {"codigo": "76", "nombre": "Valle del Cauca"},
    {"codigo": "81", "nombre": "Arauca"},
    {"codigo": "85", "nombre": "Casanare"},
    {"codigo": "86", "nombre": "Putumayo"},
    {"codigo": "88", "nombre": "Archipiélago de San Andrés"},
    {"codigo": "91", "nombre": "Amazonas"},
    {"codigo": "94", "nombre": "Guainía"},
    {"codigo": "95", "nombre": "Guaviare"},
    {"codigo": "97", "nombre": "Vaupés"},
    {"codigo": "99", "nombre": "Vichada"},
]

CIUDADES: Final[list[dict[str, str]]] = [
    {"codigo": "11001", "nombre": "Bogotá D.C.", "departamento_codigo": "11"},
    {"codigo": "76001", "nombre": "Cali", "departamento_codigo": "76"},
    {"codigo": "05001", "nombre": "Medellín", "departamento_codigo": "05"},
    {"codigo": "08001", "nombre": "Barranquilla", "departamento_codigo": "08"},
    {"codigo": "13001", "nombre": "Cartagena", "departamento_codigo": "13"},
    {"codigo": "54001", "nombre": "Cúcuta", "departamento_codigo": "54"},
    {"codigo": "68001", "nombre": "Bucaramanga", "departamento_codigo": "68"},
    {"codigo": "66001", "nombre": "Pereira", "departamento_codigo": "66"},
    {"codigo": "73001", "nombre": "Ibagué", "departamento_codigo": "73"},
    {"codigo": "17001", "nombre": "Manizales", "departamento_codigo": "17"},
    {"codigo": "52001", "nombre": "Pasto", "departamento_codigo": "52"},
    {"codigo": "85001", "nombre": "Yopal", "departamento_codigo": "85"},
    {"codigo": "20001", "nombre": "Valledupar", "departamento_codigo": "20"},
    {"codigo": "41001", "nombre": "Neiva", "departamento_codigo": "41"},
    {"codigo": "15001", "nombre": "Tunja", "departamento_codigo": "15"},
    {"codigo": "63001", "nombre": "Armenia", "departamento_codigo": "63"},
    {"codigo": "50001", "nombre": "Villavicencio", "departamento_codigo": "50"},
    {"codigo": "44001", "nombre": "Riohacha", "departamento_codigo": "44"},
    {"codigo": "70001", "nombre": "Sincelejo", "departamento_codigo": "70"},
    {"codigo": "23001", "nombre": "Montería", "departamento_codigo": "23"},
]

DEPARTAMENTOS_POR_CODIGO: Final[dict[str, str]] = {d["codigo"]: d["nombre"] for d in DEPARTAMENTOS}
CIUDADES_POR_CODIGO: Final[dict[str, dict[str, str]]] = {c["codigo"]: c for c in CIUDADES}
