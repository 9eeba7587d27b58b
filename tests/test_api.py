from __future__ import annotations

from datetime import date

from school_attendance.auth.model import Identity
from school_attendance.auth.tokens import TokenService
from school_attendance.core.enums import Role


def _add_student(client, headers, name, roll, class_name):
    resp = client.post("/api/students", json={"name": name, "roll_number": roll, "class": class_name}, headers=headers)
    assert resp.status_code == 201
    return resp.get_json()


def test_health_is_public(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["timestamp"]


def test_login_returns_token_and_public_user(client, admin_user):
    resp = client.post("/api/login", json={"username": "admin", "password": "admin123"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["token"]
    assert body["user"] == {"id": admin_user.id, "username": "admin", "role": "admin"}


def test_login_with_bad_credentials_is_401(client, admin_user):
    wrong = client.post("/api/login", json={"username": "admin", "password": "nope"})
    unknown = client.post("/api/login", json={"username": "nobody", "password": "admin123"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.get_json() == unknown.get_json() == {"error": "Invalid credentials"}


def test_missing_authorization_header_is_401(client):
    resp = client.get("/api/students")

    assert resp.status_code == 401
    assert "error" in resp.get_json()


def test_non_bearer_header_is_401(client, teacher_headers):
    token = teacher_headers["Authorization"].split()[1]

    resp = client.get("/api/students", headers={"Authorization": f"Token {token}"})

    assert resp.status_code == 401


def test_invalid_token_is_403(client):
    resp = client.get("/api/students", headers={"Authorization": "Bearer not-a-token"})

    assert resp.status_code == 403
    assert "error" in resp.get_json()


def test_mark_attendance_flow_updates_stats(client, teacher_headers, admin_user):
    asha = _add_student(client, teacher_headers, "Asha", "R1", "5A")

    for day, status in (("2024-01-10", "present"), ("2024-01-11", "absent")):
        resp = client.post(
            "/api/attendance",
            json={"date": day, "attendance": [{"student_id": asha["id"], "status": status}]},
            headers=teacher_headers,
        )
        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Attendance marked successfully"}

    stats = client.get("/api/attendance/stats", headers=teacher_headers).get_json()
    assert stats == [
        {
            "id": asha["id"],
            "name": "Asha",
            "roll_number": "R1",
            "class": "5A",
            "total_days": 2,
            "present_days": 1,
            "absent_days": 1,
            "attendance_percentage": 50,
        }
    ]

    records = client.get("/api/attendance?date=2024-01-10", headers=teacher_headers).get_json()
    assert len(records) == 1
    assert records[0]["date"] == "2024-01-10"
    assert records[0]["status"] == "present"
    assert records[0]["class"] == "5A"


def test_mark_attendance_rejects_bad_payload(client, teacher_headers):
    resp = client.post(
        "/api/attendance",
        json={"date": "2024-01-10", "attendance": [{"student_id": 1, "status": "late"}]},
        headers=teacher_headers,
    )

    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_duplicate_roll_number_is_400(client, teacher_headers):
    _add_student(client, teacher_headers, "Asha", "R1", "5A")

    resp = client.post(
        "/api/students", json={"name": "Bilal", "roll_number": "R1", "class": "5B"}, headers=teacher_headers
    )

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Roll number already exists"}
    assert len(client.get("/api/students", headers=teacher_headers).get_json()) == 1


def test_students_and_classes_filtering(client, teacher_headers):
    _add_student(client, teacher_headers, "Chen", "R3", "6B")
    _add_student(client, teacher_headers, "Asha", "R1", "5A")

    assert client.get("/api/classes", headers=teacher_headers).get_json() == ["5A", "6B"]
    only_5a = client.get("/api/students?class=5A", headers=teacher_headers).get_json()
    assert [s["name"] for s in only_5a] == ["Asha"]


def test_teacher_cannot_delete_student(client, teacher_headers, admin_headers):
    asha = _add_student(client, teacher_headers, "Asha", "R1", "5A")

    denied = client.delete(f"/api/students/{asha['id']}", headers=teacher_headers)
    assert denied.status_code == 403

    allowed = client.delete(f"/api/students/{asha['id']}", headers=admin_headers)
    assert allowed.status_code == 200
    assert allowed.get_json() == {"message": "Student deleted"}
    assert client.get("/api/students", headers=admin_headers).get_json() == []


def test_teacher_cannot_delete_users(client, teacher_headers, admin_user, store):
    resp = client.delete(f"/api/users/{admin_user.id}", headers=teacher_headers)

    assert resp.status_code == 403
    assert admin_user.id in store.users


def test_admin_manages_users_without_exposing_passwords(client, admin_headers):
    created = client.post(
        "/api/users", json={"username": "mr.khan", "password": "pw123", "role": "teacher"}, headers=admin_headers
    )
    assert created.status_code == 201

    users = client.get("/api/users", headers=admin_headers).get_json()
    assert [u["username"] for u in users] == ["admin", "mr.khan"]
    assert all("password" not in u for u in users)

    login = client.post("/api/login", json={"username": "mr.khan", "password": "pw123"})
    assert login.status_code == 200
    assert login.get_json()["user"]["role"] == "teacher"

    deleted = client.delete(f"/api/users/{created.get_json()['id']}", headers=admin_headers)
    assert deleted.get_json() == {"message": "User deleted"}


def test_duplicate_username_is_400(client, admin_headers):
    resp = client.post("/api/users", json={"username": "admin", "password": "x", "role": "admin"}, headers=admin_headers)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Username already exists"}


def test_forged_admin_claim_is_rejected(client, app, teacher_user):
    forged = TokenService(app.config["SECRET_KEY"]).issue(
        Identity(id=teacher_user.id, username=teacher_user.username, role=Role.ADMIN)
    )

    resp = client.get("/api/users", headers={"Authorization": f"Bearer {forged}"})

    assert resp.status_code == 403


def test_settings_read_and_update(client, teacher_headers, admin_headers):
    assert client.get("/api/settings", headers=teacher_headers).get_json() == {
        "min_attendance_percent": 75,
        "max_absences": 10,
    }

    denied = client.put("/api/settings", json={"min_attendance_percent": 80, "max_absences": 5}, headers=teacher_headers)
    assert denied.status_code == 403

    resp = client.put("/api/settings", json={"min_attendance_percent": 80, "max_absences": 5}, headers=admin_headers)
    assert resp.get_json() == {"message": "Settings updated"}
    assert client.get("/api/settings", headers=teacher_headers).get_json() == {
        "min_attendance_percent": 80,
        "max_absences": 5,
    }


def test_dashboard_counts_today(client, monkeypatch, admin_headers, teacher_headers):
    monkeypatch.setattr(
        "school_attendance.dashboard.service.today_local", lambda: date(2024, 1, 10)
    )
    asha = _add_student(client, teacher_headers, "Asha", "R1", "5A")
    bilal = _add_student(client, teacher_headers, "Bilal", "R2", "5A")
    _add_student(client, teacher_headers, "Chen", "R3", "6B")
    client.post(
        "/api/attendance",
        json={
            "date": "2024-01-10",
            "attendance": [
                {"student_id": asha["id"], "status": "present"},
                {"student_id": bilal["id"], "status": "absent"},
            ],
        },
        headers=teacher_headers,
    )
    client.post(
        "/api/attendance",
        json={"date": "2024-01-09", "attendance": [{"student_id": bilal["id"], "status": "present"}]},
        headers=teacher_headers,
    )

    stats = client.get("/api/dashboard/stats", headers=admin_headers).get_json()

    assert stats == {"total_students": 3, "total_teachers": 1, "total_classes": 2, "today_present": 1}
    assert client.get("/api/dashboard/stats", headers=teacher_headers).status_code == 403


def test_unexpected_errors_become_500(client, teacher_headers, container, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(container.student_service, "list_students", boom)

    resp = client.get("/api/students", headers=teacher_headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "database unavailable"}


def test_unknown_routes_and_methods_return_json(client, admin_headers):
    not_found = client.delete("/api/students/abc", headers=admin_headers)
    assert not_found.status_code == 404
    assert "error" in not_found.get_json()

    negative = client.delete("/api/users/-1", headers=admin_headers)
    assert negative.status_code == 404
    assert "error" in negative.get_json()

    not_allowed = client.patch("/api/settings", headers=admin_headers)
    assert not_allowed.status_code == 405
    assert "error" in not_allowed.get_json()


def test_fractional_ids_and_thresholds_are_rejected(client, teacher_headers, admin_headers, store):
    asha = _add_student(client, teacher_headers, "Asha", "R1", "5A")

    resp = client.post(
        "/api/attendance",
        json={"date": "2024-01-10", "attendance": [{"student_id": asha["id"] + 0.9, "status": "present"}]},
        headers=teacher_headers,
    )
    assert resp.status_code == 400
    assert store.attendance == {}

    resp = client.put("/api/settings", json={"min_attendance_percent": 80.7, "max_absences": 5}, headers=admin_headers)
    assert resp.status_code == 400
    assert client.get("/api/settings", headers=admin_headers).get_json()["min_attendance_percent"] == 75
