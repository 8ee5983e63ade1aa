from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models.assignment import Assignment
from app.models.calculated_penalty import CalculatedPenalty
from tests.conftest import TestingSessionLocal, add_participant


def login(client, email: str, password: str = "password123") -> str:
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def seed_participants(*rows):
    db = TestingSessionLocal()
    try:
        return [add_participant(db, *row).id for row in rows]
    finally:
        db.close()


def test_compute_penalties_caps_and_marks_assignment(client):
    seed_participants((1, 1, (3, 4, 0)), (1, 2, (0, 0, 0)))
    ta = login(client, "ta1@example.com")

    r = client.post("/assignments/1/penalties?source=stored", headers=auth_header(ta))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["first_calculation"] is True
    assert body["applied_max_penalty"] == 5
    totals = {row["user_id"]: row["total_penalty"] for row in body["participants"]}
    assert totals == {1: 5, 2: 0}

    r = client.get("/assignments/1", headers=auth_header(ta))
    assert r.json()["is_penalty_calculated"] is True


def test_second_pass_is_not_first_calculation(client):
    seed_participants((1, 1, (2, 0, 0)))
    instructor = login(client, "instructor1@example.com")

    first = client.post("/assignments/1/penalties?source=stored", headers=auth_header(instructor))
    second = client.post("/assignments/1/penalties?source=stored", headers=auth_header(instructor))

    assert first.json()["first_calculation"] is True
    assert second.json()["first_calculation"] is False
    assert second.json()["participants"][0]["total_penalty"] == 2

    db = TestingSessionLocal()
    try:
        assert db.query(CalculatedPenalty).count() == 1
    finally:
        db.close()


def test_student_cannot_compute_penalties(client):
    student = login(client, "student1@example.com")
    r = client.post("/assignments/1/penalties", headers=auth_header(student))
    assert r.status_code == 403


def test_compute_requires_token(client):
    r = client.post("/assignments/1/penalties")
    assert r.status_code == 401


def test_compute_unknown_assignment_is_404(client):
    ta = login(client, "ta1@example.com")
    r = client.post("/assignments/999/penalties", headers=auth_header(ta))
    assert r.status_code == 404
    assert "Assignment 999" in r.json()["detail"]


def test_compute_with_dangling_policy_is_404_and_not_marked(client):
    db = TestingSessionLocal()
    try:
        db.add(Assignment(id=3, title="Dangling", late_policy_id=77))
        db.commit()
    finally:
        db.close()
    seed_participants((3, 1, (1, 0, 0)))
    ta = login(client, "ta1@example.com")

    r = client.post("/assignments/3/penalties?source=stored", headers=auth_header(ta))
    assert r.status_code == 404
    assert "LatePolicy 77" in r.json()["detail"]

    r = client.get("/assignments/3", headers=auth_header(ta))
    assert r.json()["is_penalty_calculated"] is False


def test_list_penalties_for_staff(client):
    seed_participants((2, 1, (3, 0, 0)), (2, 2, (1, 1, 1)))
    ta = login(client, "ta1@example.com")
    client.post("/assignments/2/penalties?source=stored", headers=auth_header(ta))

    r = client.get("/assignments/2/penalties", headers=auth_header(ta))
    assert r.status_code == 200
    assert [row["total_penalty"] for row in r.json()] == [3, 3]


def test_student_sees_only_own_penalty(client):
    seed_participants((2, 1, (3, 0, 0)), (2, 2, (7, 0, 0)))
    ta = login(client, "ta1@example.com")
    client.post("/assignments/2/penalties?source=stored", headers=auth_header(ta))

    student = login(client, "student1@example.com")
    r = client.get("/assignments/2/penalties/me", headers=auth_header(student))
    assert r.status_code == 200
    assert r.json()["user_id"] == 1
    assert r.json()["total_penalty"] == 3

    r = client.get("/assignments/2/penalties", headers=auth_header(student))
    assert r.status_code == 403


def test_my_penalty_when_not_participating_is_404(client):
    student = login(client, "student2@example.com")
    r = client.get("/assignments/1/penalties/me", headers=auth_header(student))
    assert r.status_code == 404


def test_action_allowed_for_ta(client):
    ta = login(client, "ta1@example.com")
    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "compute_penalties"},
        headers=auth_header(ta),
    )
    assert r.status_code == 200
    assert r.json() == {"allowed": True}


def test_action_allowed_for_student(client):
    seed_participants((1, 1, (0, 0, 0)))
    student = login(client, "student1@example.com")

    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "view_my_scores", "assignment_id": 1},
        headers=auth_header(student),
    )
    assert r.status_code == 200
    assert r.json() == {"allowed": True}

    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "view_my_scores", "assignment_id": 2},
        headers=auth_header(student),
    )
    assert r.status_code == 403
    assert r.json() == {"allowed": False}

    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "compute_penalties", "assignment_id": 1},
        headers=auth_header(student),
    )
    assert r.status_code == 403


def test_action_allowed_unknown_action_is_denied(client):
    instructor = login(client, "instructor1@example.com")
    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "delete_everything"},
        headers=auth_header(instructor),
    )
    assert r.status_code == 403
    assert r.json() == {"allowed": False}


def test_failed_write_returns_500_and_leaves_assignment_uncalculated(client, monkeypatch):
    (participant_id,) = seed_participants((1, 1, (0, 0, 0)))
    ta = login(client, "ta1@example.com")

    def broken_flush(self, objects=None):
        raise OperationalError("UPDATE participants", {}, Exception("disk I/O error"))

    monkeypatch.setattr(Session, "flush", broken_flush)

    r = client.post("/assignments/1/penalties?source=stored", headers=auth_header(ta))
    assert r.status_code == 500
    body = r.json()
    assert body["participant_id"] == participant_id
    assert f"participant {participant_id}" in body["detail"]

    monkeypatch.undo()
    r = client.get("/assignments/1", headers=auth_header(ta))
    assert r.json()["is_penalty_calculated"] is False


def test_view_team_for_participating_student(client):
    seed_participants((1, 1, (0, 0, 0)))
    student = login(client, "student1@example.com")

    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "view_team", "assignment_id": 1},
        headers=auth_header(student),
    )
    assert r.status_code == 200
    assert r.json() == {"allowed": True}

    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "view_team", "assignment_id": 2},
        headers=auth_header(student),
    )
    assert r.status_code == 403
    assert r.json() == {"allowed": False}


def test_view_team_for_ta(client):
    ta = login(client, "ta1@example.com")
    r = client.get(
        "/grades/action_allowed",
        params={"requested_action": "view_team"},
        headers=auth_header(ta),
    )
    assert r.status_code == 200
    assert r.json() == {"allowed": True}
