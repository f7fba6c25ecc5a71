import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gradelookup.api.deps import get_admin_credentials, get_db
from gradelookup.core.security import AdminCredentials, get_password_hash
from gradelookup.core.visibility import MANAGEABLE_FIELDS
from gradelookup.db import Base, Student, VisibilitySetting
from gradelookup.main import app

ADMIN_USERNAME = "jyampa"
ADMIN_PASSWORD = "clave-de-prueba-123"
ADMIN_PASSWORD_HASH = get_password_hash(ADMIN_PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def visibility(db):
    """Carga una fila visible por campo gestionable; se invoca para ocultar/mostrar campos."""
    for field, label in MANAGEABLE_FIELDS.items():
        db.add(VisibilitySetting(field_name=field.value, is_visible=True, label=label))
    db.commit()

    def set_visible(field_name, is_visible):
        row = db.query(VisibilitySetting).filter(VisibilitySetting.field_name == field_name).one()
        row.is_visible = is_visible
        db.commit()

    return set_visible


@pytest.fixture
def make_student(db):
    def _make(dni="30111222", **overrides):
        data = {
            "dni": dni,
            "apellidos": "Diaz",
            "nombres": "Ana",
            "materia": "Matemática",
            "nota_parcial": "7",
            "recuperatorio": None,
            "porcentaje_asistencia": 85,
            "porcentaje_tp_aprobados": 90,
            "diario_clase": "Completo",
            "condicion": "REGULAR",
        }
        data.update(overrides)
        student = Student(**data)
        db.add(student)
        db.commit()
        db.refresh(student)
        return student

    return _make


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_admin_credentials] = lambda: AdminCredentials(
        username=ADMIN_USERNAME, password_hash=ADMIN_PASSWORD_HASH
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    resp = client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return client
