"""Shared fixtures: in-memory SQLite database, seeded catalogs and API client."""

from __future__ import annotations

import os

# Must be set before ``app`` is imported: settings are cached on first use
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import models  # noqa: E402,F401
from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import ConceptoRetencion, Empresa, Usuario  # noqa: E402
from app.services.auth_service import create_user_token  # noqa: E402
from app.services.seed_service import seed_reference_data  # noqa: E402
from app.utils.security import hash_password  # noqa: E402


@pytest.fixture()
def db_session() -> Session:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    seed_reference_data(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def client(db_session: Session) -> TestClient:
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    # No context manager: the lifespan (startup seeding) is not run
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def empresa(db_session: Session) -> Empresa:
    empresa = Empresa(
        numero_documento="900123456",
        digito_verificacion="8",
        nombre="COMERCIALIZADORA ANDINA SAS",
        es_agente_retenedor=True,
        municipio="Bogotá D.C.",
        activo=True,
    )
    db_session.add(empresa)
    db_session.commit()
    db_session.refresh(empresa)
    return empresa


def make_user(
    db: Session, username: str, rol: str, empresa_id: int | None = None
) -> Usuario:
    user = Usuario(
        username=username,
        email=f"{username}@erp.test",
        password_hash=hash_password("Secreto123!"),
        nombre_completo=username.title(),
        rol=rol,
        empresa_id=empresa_id,
        activo=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def bearer(user: Usuario) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture()
def admin_headers(db_session: Session) -> dict[str, str]:
    admin = db_session.query(Usuario).filter(Usuario.username == "admin").one()
    return bearer(admin)


@pytest.fixture()
def contador_headers(db_session: Session, empresa: Empresa) -> dict[str, str]:
    return bearer(make_user(db_session, "contador", "CONTABILIDAD", empresa.id))


@pytest.fixture()
def compras_headers(db_session: Session) -> dict[str, str]:
    return bearer(make_user(db_session, "compras", "COMPRAS"))


@pytest.fixture()
def consulta_headers(db_session: Session) -> dict[str, str]:
    return bearer(make_user(db_session, "consulta", "CONSULTA"))


@pytest.fixture()
def concepto_ids(db_session: Session) -> dict[str, int]:
    """Seeded concept code → primary key."""
    return {c.codigo: c.id for c in db_session.query(ConceptoRetencion).all()}
