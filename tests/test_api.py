from __future__ import annotations

import pytest

from congregation_attendance.main import create_app


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="config.testing")
    return app.test_client()


@pytest.fixture
def logged_in(client):
    res = client.post("/login", json={"password": "123456"})
    assert res.status_code == 200
    return client


def test_api_requires_login(client):
    res = client.get("/api/units")

    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_wrong_password(client):
    res = client.post("/login", json={"password": "nope"})

    assert res.status_code == 401
    assert client.get("/api/units").status_code == 401


def test_logout_clears_session(logged_in):
    logged_in.post("/logout")

    assert logged_in.get("/api/units").status_code == 401


def test_units_and_calendar(logged_in):
    units = logged_in.get("/api/units").get_json()
    assert {u["unit_id"] for u in units["units"]} == {"central", "north", "empty"}

    cal = logged_in.get("/api/units/central/calendar?month=2026-02").get_json()
    assert len(cal["dates"]) == 8
    assert cal["dates"][0] == {"date": "2026-02-01", "completed": False}
    assert cal["previous"] == {"period": "2026-01", "entry_date": "2026-01-04"}
    assert cal["next"] == {"period": "2026-03", "entry_date": "2026-03-01"}


def test_unknown_unit_is_404(logged_in):
    assert logged_in.get("/api/units/nope/calendar?month=2026-02").status_code == 404


def test_attendance_toggle_over_http(logged_in):
    body = {"member_id": "m1", "unit_id": "central", "date": "2026-02-01", "status": "PRESENT"}

    first = logged_in.post("/api/attendance", json=body).get_json()
    assert first["record"]["status"] == "PRESENT"

    second = logged_in.post("/api/attendance", json=body).get_json()
    assert second["success"] is True
    assert second["record"] is None


def test_bad_status_is_400(logged_in):
    body = {"member_id": "m1", "unit_id": "central", "date": "2026-02-01", "status": "LATE"}

    assert logged_in.post("/api/attendance", json=body).status_code == 400


def test_register_snaps_to_service_day_and_finalizes(logged_in):
    view = logged_in.get("/api/units/central/register?date=2026-02-02").get_json()
    assert view["date"] == "2026-02-01"
    assert view["summary"]["not_registered"] == 3

    res = logged_in.post("/api/units/central/register/finalize", json={"date": "2026-02-01"}).get_json()
    assert res["marked_absent"] == 3

    view = logged_in.get("/api/units/central/register?date=2026-02-01&status=ABSENT").get_json()
    assert len(view["members"]) == 3
    assert view["summary"]["completed"] is True


def test_report_and_followups(logged_in):
    report = logged_in.get("/api/units/central/report?month=2026-02").get_json()
    assert report["total_services"] == 8
    assert report["category_counts"]["CRITICAL"] == 3

    board = logged_in.get("/api/units/central/followups?month=2026-02").get_json()
    assert len(board["active"]) == 3

    res = logged_in.post("/api/followups", json={"member_id": "m1", "period": "2026-02", "status": "DONE"})
    assert res.status_code == 200

    board = logged_in.get("/api/units/central/followups?month=2026-02").get_json()
    assert [e["member_id"] for e in board["resolved"]] == ["m1"]

    msg = logged_in.get("/api/units/central/followups/m1/escalation?month=2026-02").get_json()
    assert msg["url"].startswith("https://wa.me/5511999990000?text=")
    assert "Status: DONE" in msg["text"]


def test_settings_validation(logged_in):
    res = logged_in.put("/api/settings", json={"thresholds": {"attention": 4, "low": 2, "critical": 5}})
    assert res.status_code == 400

    res = logged_in.put("/api/settings", json={"thresholds": {"attention": 2, "low": 4, "critical": 6}})
    assert res.status_code == 200
    assert res.get_json()["thresholds"]["low"] == 4


def test_members_create_and_import(logged_in):
    res = logged_in.post("/api/members", json={"name": "Fabio", "unit_id": "north"})
    assert res.status_code == 200

    res = logged_in.post("/api/members/import", json={"unit_id": "north", "members": [{"name": "Hugo"}, {"name": ""}]})
    assert res.status_code == 400

    names = [m["name"] for m in logged_in.get("/api/members?unit_id=north").get_json()["members"]]
    assert names == ["Elisa", "Fabio"]


@pytest.mark.parametrize(
    "body",
    [
        {"name": "Fabio", "unit_id": "north", "phone": 5511},
        {"name": "Fabio", "unit_id": "north", "nucleus_id": ["youth"]},
        {"name": "Fabio", "unit_id": "north", "active": "no"},
        {"name": 42, "unit_id": "north"},
    ],
)
def test_member_with_wrong_field_types_is_400(logged_in, body):
    assert logged_in.post("/api/members", json=body).status_code == 400


@pytest.mark.parametrize(
    "rows",
    [
        ["Hugo"],
        [{"name": "Hugo", "phone": 123}],
        [None],
    ],
)
def test_import_with_malformed_rows_is_400(logged_in, rows):
    res = logged_in.post("/api/members/import", json={"unit_id": "north", "members": rows})

    assert res.status_code == 400
    assert res.get_json()["message"].startswith("Row 1:")
    names = [m["name"] for m in logged_in.get("/api/members?unit_id=north").get_json()["members"]]
    assert names == ["Elisa"]
