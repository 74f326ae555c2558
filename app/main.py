import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.utils.logging_config import configure_logging

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def _seed_reference_data() -> None:
    """Create tables and insert default catalogs and the admin user."""
    from app import models  # noqa: F401
    from app.database import Base, SessionLocal, engine
    from app.services.seed_service import seed_reference_data

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_reference_data(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        _seed_reference_data()
    else:
        logger.info("SEED_ON_STARTUP disabled, skipping seed.")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(f"{settings.API_PREFIX}/health")
def health_check():
    return {"status": "ok", "app": settings.APP_NAME}


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from app.routers import auth  # noqa: E402

app.include_router(auth.router, prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])

# Suppliers and their retention assignments
from app.routers import proveedores  # noqa: E402

app.include_router(
    proveedores.router,
    prefix=f"{settings.API_PREFIX}/proveedores",
    tags=["Proveedores"],
)

# Withholding concept catalog
from app.routers import conceptos_retencion  # noqa: E402

app.include_router(
    conceptos_retencion.router,
    prefix=f"{settings.API_PREFIX}/conceptos-retencion",
    tags=["Conceptos de Retención"],
)

# Calculator and NIT check digit
from app.routers import retenciones  # noqa: E402

app.include_router(
    retenciones.router,
    prefix=f"{settings.API_PREFIX}/retenciones",
    tags=["Retenciones"],
)

# Master data / dropdown sources
from app.routers import datos_maestros  # noqa: E402

app.include_router(
    datos_maestros.router,
    prefix=f"{settings.API_PREFIX}/datos-maestros",
    tags=["Datos Maestros"],
)

# Administrative SQL console
from app.routers import consola_sql  # noqa: E402

app.include_router(
    consola_sql.router,
    prefix=f"{settings.API_PREFIX}/database",
    tags=["Base de Datos"],
)

# Exportación (Excel)
from app.routers import exportacion  # noqa: E402

app.include_router(
    exportacion.router,
    prefix=f"{settings.API_PREFIX}/exportar",
    tags=["Exportación"],
)
