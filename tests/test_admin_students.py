import pytest
from sqlalchemy.exc import OperationalError

from gradelookup.core.exceptions import DuplicateKey, NotFound, StoreError
from gradelookup.crud import student as crud_student
from gradelookup.db import Student
from gradelookup.schemas.student import StudentCreate, StudentUpdate
from gradelookup.services import students as students_service


def _payload(**overrides):
    data = {
        "dni": "40222333",
        "apellidos": "Gomez",
        "nombres": "Lucia",
        "materia": "Historia",
        "nota_parcial": "8",
        "recuperatorio": "",
        "porcentaje_asistencia": "75",
        "porcentaje_tp_aprobados": "",
        "diario_clase": "",
        "condicion": "PROMOCIONADO",
    }
    data.update(overrides)
    return data


def test_admin_routes_require_session(client):
    assert client.get("/api/admin/students").status_code == 401
    assert client.post("/api/admin/students", json=_payload()).status_code == 401
    assert client.delete("/api/admin/students").status_code == 401


def test_create_coerces_blank_fields(admin_client):
    resp = admin_client.post("/api/admin/students", json=_payload(nota_parcial=7))
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["dni"] == "40222333"
    assert data["nota_parcial"] == "7"
    assert data["recuperatorio"] is None
    assert data["porcentaje_asistencia"] == 75
    assert data["porcentaje_tp_aprobados"] is None
    assert data["diario_clase"] is None


def test_create_duplicate_dni_is_409(admin_client, make_student):
    make_student(dni="40222333")
    resp = admin_client.post("/api/admin/students", json=_payload())
    assert resp.status_code == 409
    assert resp.json()["code"] == "DUPLICATE_KEY"
    assert "40222333" in resp.json()["error"]
    assert resp.json()["dni"] == "40222333"


@pytest.mark.parametrize("overrides", [
    {"condicion": ""},
    {"apellidos": "   "},
    {"dni": "123"},
    {"dni": "1234567890123456"},
    {"porcentaje_asistencia": 150},
    {"porcentaje_tp_aprobados": -1},
])
def test_create_rejects_invalid_input(admin_client, overrides):
    resp = admin_client.post("/api/admin/students", json=_payload(**overrides))
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"
    assert resp.json()["field"] == next(iter(overrides))


def test_create_with_missing_fields_is_a_validation_error(admin_client, db):
    resp = admin_client.post("/api/admin/students", json={"dni": "40222333"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["field"] == "apellidos"
    assert "apellidos" in body["error"]
    assert "detail" not in body
    assert db.query(Student).count() == 0


def test_list_is_ordered_and_filterable(admin_client, make_student):
    make_student(dni="30000001", apellidos="Zapata", nombres="Bruno")
    make_student(dni="30000002", apellidos="Acosta", nombres="Carla")
    make_student(dni="41000003", apellidos="Acosta", nombres="Ariel")

    resp = admin_client.get("/api/admin/students")
    assert resp.status_code == 200
    assert [s["dni"] for s in resp.json()["data"]] == ["41000003", "30000002", "30000001"]

    resp = admin_client.get("/api/admin/students", params={"dni": "3000"})
    assert {s["dni"] for s in resp.json()["data"]} == {"30000001", "30000002"}


def test_get_returns_full_record_regardless_of_visibility(admin_client, visibility, make_student):
    make_student(dni="30111222")
    visibility("condicion", False)

    resp = admin_client.get("/api/admin/students/30111222")
    assert resp.status_code == 200
    assert resp.json()["data"]["condicion"] == "REGULAR"
    assert resp.json()["data"]["apellidos"] == "Diaz"

    assert admin_client.get("/api/admin/students/00000000").status_code == 404


def test_update_keeps_dni(admin_client, db, make_student):
    make_student(dni="30111222")
    # un "dni" en el cuerpo se ignora: la clave no es editable
    body = _payload(dni="99999999", condicion="LIBRE", porcentaje_asistencia="")
    resp = admin_client.put("/api/admin/students/30111222", json=body)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["dni"] == "30111222"
    assert data["condicion"] == "LIBRE"
    assert data["porcentaje_asistencia"] is None
    assert db.query(Student).filter(Student.dni == "99999999").first() is None


def test_update_and_delete_unknown_dni_are_404(admin_client):
    body = _payload()
    body.pop("dni")
    resp = admin_client.put("/api/admin/students/00000000", json=body)
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOT_FOUND"
    assert admin_client.delete("/api/admin/students/00000000").status_code == 404


def test_delete_one(admin_client, db, make_student):
    make_student(dni="30111222")
    resp = admin_client.delete("/api/admin/students/30111222")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"dni": "30111222"}
    assert db.query(Student).count() == 0


def test_delete_all(admin_client, db, make_student):
    for i in range(3):
        make_student(dni=f"3000000{i}")
    resp = admin_client.delete("/api/admin/students")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"deleted": 3}
    assert db.query(Student).count() == 0


# --- servicio, sin HTTP ---

def test_service_error_taxonomy(db, make_student):
    make_student(dni="30111222")
    with pytest.raises(DuplicateKey):
        students_service.create_student(db, StudentCreate(**_payload(dni="30111222")))

    update = StudentUpdate(**{k: v for k, v in _payload().items() if k != "dni"})
    with pytest.raises(NotFound):
        students_service.update_student(db, "00000000", update)
    with pytest.raises(NotFound):
        students_service.delete_student(db, "00000000")


def _boom(*args, **kwargs):
    raise OperationalError("UPDATE ...", {}, Exception("server closed the connection"))


@pytest.mark.parametrize("crud_name, call", [
    ("get_students", lambda db: students_service.list_students(db)),
    ("get_student_by_dni", lambda db: students_service.get_student(db, "30111222")),
    ("get_student_by_dni", lambda db: students_service.create_student(db, StudentCreate(**_payload()))),
    ("create_student", lambda db: students_service.create_student(db, StudentCreate(**_payload()))),
    ("update_student", lambda db: students_service.update_student(
        db, "30111222", StudentUpdate(**{k: v for k, v in _payload().items() if k != "dni"})
    )),
    ("delete_student", lambda db: students_service.delete_student(db, "30111222")),
    ("delete_all_students", lambda db: students_service.delete_all_students(db)),
])
def test_store_failures_become_store_errors(db, make_student, monkeypatch, crud_name, call):
    make_student(dni="30111222")
    monkeypatch.setattr(crud_student, crud_name, _boom)

    with pytest.raises(StoreError) as exc:
        call(db)
    assert "server closed" not in exc.value.message
    # la sesión queda usable tras el rollback
    monkeypatch.undo()
    assert crud_student.get_student_by_dni(db, "30111222") is not None


def test_store_failure_over_http_is_503(admin_client, make_student, monkeypatch):
    make_student(dni="30111222")
    monkeypatch.setattr(crud_student, "delete_all_students", _boom)
    monkeypatch.setattr(crud_student, "get_students", _boom)

    for resp in (
        admin_client.delete("/api/admin/students"),
        admin_client.get("/api/admin/students"),
    ):
        assert resp.status_code == 503
        assert resp.json()["code"] == "STORE_ERROR"
        assert "server closed" not in resp.json()["error"]
