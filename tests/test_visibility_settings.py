from sqlalchemy.exc import OperationalError

from gradelookup.core.visibility import MANAGEABLE_FIELDS, PublicField
from gradelookup.crud import visibility as crud_visibility
from gradelookup.db import VisibilitySetting


def test_settings_require_session(client):
    assert client.get("/api/admin/visibility").status_code == 401
    resp = client.put("/api/admin/visibility/condicion", json={"is_visible": False})
    assert resp.status_code == 401


def test_lists_every_manageable_field(admin_client, visibility):
    visibility("condicion", False)

    resp = admin_client.get("/api/admin/visibility")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [s["field_name"] for s in data] == [f.value for f in PublicField]
    assert all(s["configured"] for s in data)

    by_name = {s["field_name"]: s for s in data}
    assert by_name["condicion"]["is_visible"] is False
    assert by_name["studentName"]["label"] == MANAGEABLE_FIELDS[PublicField.STUDENT_NAME]


def test_missing_rows_are_reported_as_unconfigured(admin_client, db):
    db.add(VisibilitySetting(field_name="dni", is_visible=False, label="DNI"))
    db.commit()

    data = admin_client.get("/api/admin/visibility").json()["data"]
    assert len(data) == len(PublicField)
    by_name = {s["field_name"]: s for s in data}
    assert by_name["dni"]["configured"] is True
    assert by_name["dni"]["is_visible"] is False
    assert by_name["condicion"]["configured"] is False
    assert by_name["condicion"]["is_visible"] is True


def test_toggle_is_reflected_in_the_public_lookup(admin_client, visibility, make_student):
    make_student(dni="30111222")

    resp = admin_client.put("/api/admin/visibility/condicion", json={"is_visible": False})
    assert resp.status_code == 200
    assert resp.json()["data"]["field_name"] == "condicion"
    assert resp.json()["data"]["is_visible"] is False

    data = admin_client.post("/api/grades/lookup", json={"dni": "30111222"}).json()["data"]
    assert "condicion" not in data
    assert data["studentName"] == "Diaz Ana"

    admin_client.put("/api/admin/visibility/condicion", json={"is_visible": True})
    data = admin_client.post("/api/grades/lookup", json={"dni": "30111222"}).json()["data"]
    assert data["condicion"] == "REGULAR"


def test_unknown_field_is_rejected(admin_client, visibility):
    resp = admin_client.put("/api/admin/visibility/apellidos", json={"is_visible": False})
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"
    assert resp.json()["field"] == "field_name"


def test_update_without_stored_row_is_404(admin_client):
    resp = admin_client.put("/api/admin/visibility/condicion", json={"is_visible": False})
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOT_FOUND"
    assert "condicion" in resp.json()["error"]


def test_missing_table_is_reported_to_the_admin(admin_client, engine, make_student):
    make_student(dni="30111222")
    VisibilitySetting.__table__.drop(engine)

    resp = admin_client.get("/api/admin/visibility")
    assert resp.status_code == 503
    assert resp.json()["code"] == "CONFIG_MISSING"
    assert "alembic upgrade head" in resp.json()["error"]

    # la consulta pública sigue funcionando con todos los campos
    resp = admin_client.post("/api/grades/lookup", json={"dni": "30111222"})
    assert resp.status_code == 200
    assert set(resp.json()["data"]) == {f.value for f in PublicField}


def test_update_store_failure_is_503(admin_client, visibility, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("UPDATE ...", {}, Exception("disk I/O error"))

    monkeypatch.setattr(crud_visibility, "set_visibility", boom)
    resp = admin_client.put("/api/admin/visibility/condicion", json={"is_visible": False})
    assert resp.status_code == 503
    assert resp.json()["code"] == "STORE_ERROR"

    monkeypatch.undo()
    data = admin_client.get("/api/admin/visibility").json()["data"]
    assert {s["field_name"]: s["is_visible"] for s in data}["condicion"] is True
