import json
from datetime import date

from classbook.db import ClassSession, Student

MONDAY_9AM = json.dumps({"days": ["Monday"], "time": "09:00", "durationMinutes": 60})


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_login(client, make_user):
    make_user("admin", password="pa55word")
    ok = client.post("/api/auth/login", json={"email": "admin@school.test", "password": "pa55word"})
    assert ok.status_code == 200
    assert ok.json()["token_type"] == "bearer"

    bad = client.post("/api/auth/login", json={"email": "admin@school.test", "password": "nope"})
    assert bad.status_code == 401


def test_requires_token(client):
    assert client.post("/api/scheduler/run").status_code == 401


def test_run_scheduler_as_admin(client, make_user, make_class, auth_headers):
    admin = make_user("admin")
    make_class("c1", MONDAY_9AM)

    resp = client.post("/api/scheduler/run", json={"month": "2024-03", "lookahead_months": 0}, headers=auth_headers(admin))

    assert resp.status_code == 200
    body = resp.json()
    assert body["months"] == ["2024-03"]
    assert body["classes_processed"] == 1
    assert body["sessions_created"] == 4
    assert body["errors"] == []
    assert [s["date"] for s in body["sessions"]] == ["2024-03-04", "2024-03-11", "2024-03-18", "2024-03-25"]

    again = client.post("/api/scheduler/run", json={"month": "2024-03", "lookahead_months": 0}, headers=auth_headers(admin))
    assert again.json()["sessions_created"] == 0


def test_run_scheduler_rejects_bad_month(client, make_user, auth_headers):
    admin = make_user("admin")
    resp = client.post("/api/scheduler/run", json={"month": "2024-13"}, headers=auth_headers(admin))
    assert resp.status_code == 400


def test_run_scheduler_forbidden_for_teacher(client, make_user, auth_headers):
    teacher = make_user("teacher")
    resp = client.post("/api/scheduler/run", headers=auth_headers(teacher))
    assert resp.status_code == 403


def test_run_scheduler_sweep_failure_is_500(client, make_user, monkeypatch, auth_headers):
    admin = make_user("admin")

    def boom(self):
        raise RuntimeError("db down")

    monkeypatch.setattr("classbook.crud.class_group.SqlClassStore.list_scheduled_classes", boom)
    resp = client.post("/api/scheduler/run", headers=auth_headers(admin))
    assert resp.status_code == 500


def test_delete_month_sessions(client, db, make_user, make_class, auth_headers):
    admin = make_user("admin")
    make_class("c1", MONDAY_9AM)
    client.post("/api/scheduler/run", json={"month": "2024-03", "lookahead_months": 1}, headers=auth_headers(admin))

    resp = client.delete("/api/scheduler/sessions", params={"month": "2024-03"}, headers=auth_headers(admin))

    assert resp.status_code == 200
    assert resp.json()["month"] == "2024-03"
    assert resp.json()["deleted"] == 4
    assert db.query(ClassSession).count() == 5


def test_class_schedule_roundtrip(client, db, make_user, make_class, auth_headers):
    admin = make_user("admin")
    make_class("c1")

    resp = client.put(
        "/api/classes/c1/schedule",
        json={"schedule": {"days": ["Monday", "Funday"], "time": "09:00"}},
        headers=auth_headers(admin),
    )
    assert resp.status_code == 200
    assert resp.json()["schedule"] == {"days": ["Monday"], "time": "09:00", "durationMinutes": 60}

    got = client.get("/api/classes/c1/schedule", headers=auth_headers(admin)).json()
    assert got["schedule"]["days"] == ["Monday"]


def test_class_schedule_unknown_class(client, make_user, auth_headers):
    admin = make_user("admin")
    assert client.get("/api/classes/nope/schedule", headers=auth_headers(admin)).status_code == 404


def test_manual_session_conflicts_with_existing_date(client, make_user, make_class, auth_headers):
    teacher = make_user("teacher")
    make_class("c1")
    payload = {"class_id": "c1", "date": "2024-03-04", "start_time": "10:00", "type": "MAKEUP"}

    created = client.post("/api/sessions/", json=payload, headers=auth_headers(teacher))
    assert created.status_code == 201
    assert created.json()["type"] == "MAKEUP"
    assert created.json()["id"]

    dup = client.post("/api/sessions/", json=payload, headers=auth_headers(teacher))
    assert dup.status_code == 409


def test_manual_session_unknown_class(client, make_user, auth_headers):
    teacher = make_user("teacher")
    payload = {"class_id": "ghost", "date": "2024-03-04", "start_time": "10:00"}
    assert client.post("/api/sessions/", json=payload, headers=auth_headers(teacher)).status_code == 404


def test_update_status_allows_any_transition(client, make_user, make_class, auth_headers):
    teacher = make_user("teacher")
    make_class("c1")
    payload = {"id": "s1", "class_id": "c1", "date": "2024-03-04", "start_time": "10:00"}
    client.post("/api/sessions/", json=payload, headers=auth_headers(teacher))

    for status in ("COMPLETED", "SCHEDULED", "CANCELLED"):
        resp = client.patch("/api/sessions/s1/status", json={"status": status}, headers=auth_headers(teacher))
        assert resp.status_code == 200
        assert resp.json()["status"] == status

    bad = client.patch("/api/sessions/s1/status", json={"status": "DONE"}, headers=auth_headers(teacher))
    assert bad.status_code == 422


def test_list_sessions_by_month(client, make_user, make_class, auth_headers):
    admin = make_user("admin")
    make_class("c1", MONDAY_9AM)
    client.post("/api/scheduler/run", json={"month": "2024-03", "lookahead_months": 1}, headers=auth_headers(admin))

    resp = client.get("/api/sessions/", params={"class_id": "c1", "month": "2024-04"}, headers=auth_headers(admin))

    assert resp.status_code == 200
    assert [s["date"] for s in resp.json()] == ["2024-04-01", "2024-04-08", "2024-04-15", "2024-04-22", "2024-04-29"]
    assert client.get("/api/sessions/", params={"month": "04-2024"}, headers=auth_headers(admin)).status_code == 400


def test_attendance_upsert_and_sync(client, db, make_user, make_class, make_student, auth_headers):
    teacher = make_user("teacher")
    c1 = make_class("c1")
    make_student("s1", [c1])
    db.add(ClassSession(id="x1", class_id="c1", date=date(2024, 3, 4), start_time="09:00",
                        type="REGULAR", status="COMPLETED"))
    db.commit()

    first = client.post("/api/attendance/record",
                        json={"session_id": "x1", "student_id": "s1", "status": "ABSENT", "reason": "sick"},
                        headers=auth_headers(teacher))
    second = client.post("/api/attendance/record",
                         json={"session_id": "x1", "student_id": "s1", "status": "PRESENT"},
                         headers=auth_headers(teacher))
    assert first.status_code == 200
    assert second.json()["id"] == first.json()["id"]

    records = client.get("/api/attendance/session/x1", headers=auth_headers(teacher)).json()
    assert [r["status"] for r in records] == ["PRESENT"]

    synced = client.post("/api/sync/attendance/student/s1", headers=auth_headers(teacher))
    assert synced.json() == {"student_id": "s1", "attendance": 100}
    db.expire_all()
    assert db.get(Student, "s1").attendance == 100


def test_attendance_for_student_outside_class(client, db, make_user, make_class, make_student, auth_headers):
    teacher = make_user("teacher")
    make_class("c1")
    make_student("s1")
    db.add(ClassSession(id="x1", class_id="c1", date=date(2024, 3, 4), start_time="09:00",
                        type="REGULAR", status="SCHEDULED"))
    db.commit()

    resp = client.post("/api/attendance/record",
                       json={"session_id": "x1", "student_id": "s1", "status": "PRESENT"},
                       headers=auth_headers(teacher))
    assert resp.status_code == 400


def test_sync_unknown_student(client, make_user, auth_headers):
    admin = make_user("admin")
    assert client.post("/api/sync/attendance/student/ghost", headers=auth_headers(admin)).status_code == 404


def test_sync_all_admin_only(client, make_user, auth_headers):
    teacher = make_user("teacher")
    assert client.post("/api/sync/attendance", headers=auth_headers(teacher)).status_code == 403
