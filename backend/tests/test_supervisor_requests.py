"""학생-지도교수 배정 요청/응답 흐름을 검증하는 테스트입니다."""

from thesisflow.models.project import Project
from thesisflow.models.supervisor_request import SupervisorRequest
from thesisflow.models.user import SupervisedProject
from tests.conftest import auth_headers, create_project

MESSAGE = "I would like you to supervise my thesis project."


def _send(client, headers, supervisor_id, project_id=None, message=MESSAGE):
    payload = {"supervisor_id": supervisor_id, "message": message}
    if project_id is not None:
        payload["project_id"] = project_id
    return client.post("/api/supervisors/requests", json=payload, headers=headers)


def _respond(client, headers, request_id, action, response=None):
    return client.patch(
        f"/api/supervisors/requests/{request_id}/respond",
        json={"action": action, "response": response},
        headers=headers,
    )


def test_send_request_and_list(client, seed_users):
    student_headers = auth_headers(client, "stu001")
    project = create_project(client, student_headers)

    resp = _send(client, student_headers, seed_users["supervisor"].user_id, project["project_id"])
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "pending"
    assert body["project_title"] == project["title"]

    mine = client.get("/api/supervisors/my-requests", headers=student_headers)
    assert [r["request_id"] for r in mine.json()] == [body["request_id"]]

    inbox = client.get("/api/supervisors/pending-requests", headers=auth_headers(client, "sup001"))
    assert [r["request_id"] for r in inbox.json()] == [body["request_id"]]
    assert inbox.json()[0]["student_name"] == "Student One"


def test_duplicate_pending_request_conflicts(client, seed_users):
    student_headers = auth_headers(client, "stu001")
    project = create_project(client, student_headers)
    supervisor_id = seed_users["supervisor"].user_id

    assert _send(client, student_headers, supervisor_id, project["project_id"]).status_code == 200
    assert _send(client, student_headers, supervisor_id, project["project_id"]).status_code == 409
    # 과제 없는 요청은 별도 triple 이다.
    assert _send(client, student_headers, supervisor_id).status_code == 200
    assert _send(client, student_headers, supervisor_id).status_code == 409


def test_request_target_validation(client, seed_users):
    student_headers = auth_headers(client, "stu001")
    assert _send(client, student_headers, 9999).status_code == 404
    assert _send(client, student_headers, seed_users["student2"].user_id).status_code == 400
    assert _send(client, student_headers, seed_users["supervisor"].user_id, message="too short").status_code == 422


def test_request_for_someone_elses_project_forbidden(client, seed_users):
    project = create_project(client, auth_headers(client, "stu001"))
    resp = _send(client, auth_headers(client, "stu002"), seed_users["supervisor"].user_id, project["project_id"])
    assert resp.status_code == 403


def test_only_students_can_request(client, seed_users):
    resp = _send(client, auth_headers(client, "sup002"), seed_users["supervisor"].user_id)
    assert resp.status_code == 403


def test_approve_assigns_supervisor_without_changing_status(client, db, seed_users):
    student_headers = auth_headers(client, "stu001")
    project = create_project(client, student_headers)
    supervisor = seed_users["supervisor"]
    request_id = _send(client, student_headers, supervisor.user_id, project["project_id"]).json()["request_id"]

    resp = _respond(client, auth_headers(client, "sup001"), request_id, "approve", "Happy to help")
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "approved"
    assert resp.json()["supervisor_response"] == "Happy to help"
    assert resp.json()["responded_at"] is not None

    db.expire_all()
    row = db.query(Project).filter(Project.project_id == project["project_id"]).first()
    assert row.supervisor_id == supervisor.user_id
    assert row.status == "draft"
    assert db.query(SupervisedProject).filter(
        SupervisedProject.user_id == supervisor.user_id,
        SupervisedProject.project_id == project["project_id"],
    ).count() == 1

    # 배정 후에는 요청 단계에서 거절된다.
    again = _send(client, student_headers, seed_users["supervisor2"].user_id, project["project_id"])
    assert again.status_code == 409


def test_respond_twice_is_rejected(client, seed_users):
    student_headers = auth_headers(client, "stu001")
    supervisor_headers = auth_headers(client, "sup001")
    request_id = _send(client, student_headers, seed_users["supervisor"].user_id).json()["request_id"]

    assert _respond(client, supervisor_headers, request_id, "reject", "No capacity").status_code == 200
    assert _respond(client, supervisor_headers, request_id, "approve").status_code == 400


def test_respond_to_other_supervisors_request_forbidden(client, seed_users):
    request_id = _send(client, auth_headers(client, "stu001"), seed_users["supervisor"].user_id).json()["request_id"]
    assert _respond(client, auth_headers(client, "sup002"), request_id, "approve").status_code == 403
    assert _respond(client, auth_headers(client, "sup001"), 9999, "approve").status_code == 404


def test_reject_leaves_project_unassigned(client, db, seed_users):
    student_headers = auth_headers(client, "stu001")
    project = create_project(client, student_headers)
    request_id = _send(client, student_headers, seed_users["supervisor"].user_id, project["project_id"]).json()["request_id"]

    resp = _respond(client, auth_headers(client, "sup001"), request_id, "reject")
    assert resp.json()["status"] == "rejected"
    db.expire_all()
    assert db.query(Project).filter(Project.project_id == project["project_id"]).first().supervisor_id is None


def test_second_approval_conflicts_and_rolls_back(client, db, seed_users):
    student_headers = auth_headers(client, "stu001")
    project = create_project(client, student_headers)
    first = _send(client, student_headers, seed_users["supervisor"].user_id, project["project_id"]).json()
    second = _send(client, student_headers, seed_users["supervisor2"].user_id, project["project_id"]).json()

    assert _respond(client, auth_headers(client, "sup001"), first["request_id"], "approve").status_code == 200
    resp = _respond(client, auth_headers(client, "sup002"), second["request_id"], "approve")
    assert resp.status_code == 409

    db.expire_all()
    assert db.query(Project).filter(Project.project_id == project["project_id"]).first().supervisor_id == (
        seed_users["supervisor"].user_id
    )
    pending = db.query(SupervisorRequest).filter(SupervisorRequest.request_id == second["request_id"]).first()
    assert pending.status == "pending"
    assert pending.responded_at is None
    assert db.query(SupervisedProject).filter(SupervisedProject.user_id == seed_users["supervisor2"].user_id).count() == 0


def test_response_notifies_student(client, seed_users):
    student_headers = auth_headers(client, "stu001")
    request_id = _send(client, student_headers, seed_users["supervisor"].user_id).json()["request_id"]
    _respond(client, auth_headers(client, "sup001"), request_id, "approve")

    notis = client.get("/api/notifications", headers=student_headers).json()
    assert [n["noti_type"] for n in notis] == ["request_response"]
