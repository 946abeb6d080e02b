"""Supervisor Service 도메인 서비스 레이어입니다. 학생-지도교수 배정 요청과 응답을 처리합니다.

배정 승인은 과제의 워크플로 상태를 바꾸지 않습니다.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session
from thesisflow.models.project import Project
from thesisflow.models.supervisor_request import SupervisorRequest
from thesisflow.models.user import User, SupervisedProject
from thesisflow.schemas.supervisor import SupervisorRequestCreate
from thesisflow.services import notification_service, project_service
from thesisflow.utils.errors import NotFound, Forbidden, PreconditionFailed, ValidationError, Conflict
from thesisflow.utils.permissions import SUPERVISOR
from typing import List, Optional

logger = logging.getLogger(__name__)

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"


def _find_pending(db: Session, student_id: int, supervisor_id: int, project_id: Optional[int]) -> Optional[SupervisorRequest]:
    q = db.query(SupervisorRequest).filter(
        SupervisorRequest.student_id == student_id,
        SupervisorRequest.supervisor_id == supervisor_id,
        SupervisorRequest.status == PENDING,
    )
    if project_id is None:
        q = q.filter(SupervisorRequest.project_id.is_(None))
    else:
        q = q.filter(SupervisorRequest.project_id == project_id)
    return q.first()


def send_request(db: Session, data: SupervisorRequestCreate, current_user: User) -> SupervisorRequest:
    supervisor = db.query(User).filter(User.user_id == data.supervisor_id).first()
    if not supervisor:
        raise NotFound("Supervisor not found")
    if supervisor.role != SUPERVISOR:
        raise ValidationError("User is not a supervisor")

    if data.project_id is not None:
        project = project_service.get_project_or_404(db, data.project_id)
        if project.author_id != current_user.user_id:
            raise Forbidden("Project does not belong to you")
        if project.supervisor_id:
            raise Conflict("Project already has a supervisor assigned")

    if _find_pending(db, current_user.user_id, data.supervisor_id, data.project_id):
        raise Conflict("You already have a pending request to this supervisor for this project")

    request = SupervisorRequest(
        student_id=current_user.user_id,
        supervisor_id=data.supervisor_id,
        project_id=data.project_id,
        message=data.message.strip(),
        status=PENDING,
        supervisor_response="",
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info(
        "[supervisor] request created request=%s student=%s supervisor=%s project=%s",
        request.request_id, current_user.user_id, data.supervisor_id, data.project_id,
    )

    notification_service.notify(
        db,
        data.supervisor_id,
        "supervisor_request",
        "지도교수 요청",
        f"{current_user.name} 학생이 지도를 요청했습니다.",
        "/supervisors/pending-requests",
    )
    return request


def respond_to_request(db: Session, request_id: int, action: str, response: Optional[str], current_user: User) -> SupervisorRequest:
    request = db.query(SupervisorRequest).filter(SupervisorRequest.request_id == request_id).first()
    if not request:
        raise NotFound("Request not found")
    if request.supervisor_id != current_user.user_id:
        raise Forbidden("This request is not for you")
    if not request.is_pending:
        raise PreconditionFailed("Request has already been responded to")
    if action not in ("approve", "reject"):
        raise ValidationError(f"Invalid action: {action}")

    new_status = APPROVED if action == "approve" else REJECTED
    now = datetime.utcnow()
    # pending 인 경우에만 응답을 반영한다. 동시 응답은 한 건만 성공한다.
    updated = (
        db.query(SupervisorRequest)
        .filter(SupervisorRequest.request_id == request_id, SupervisorRequest.status == PENDING)
        .update(
            {"status": new_status, "supervisor_response": (response or "").strip(), "responded_at": now},
            synchronize_session=False,
        )
    )
    if updated != 1:
        db.rollback()
        raise PreconditionFailed("Request has already been responded to")

    if new_status == APPROVED and request.project_id is not None:
        # 요청 이후 다른 지도교수가 배정되었으면 응답 전체를 되돌린다.
        assigned = (
            db.query(Project)
            .filter(Project.project_id == request.project_id, Project.supervisor_id.is_(None))
            .update({"supervisor_id": current_user.user_id, "updated_at": now}, synchronize_session=False)
        )
        if assigned != 1:
            db.rollback()
            raise Conflict("Project already has a supervisor assigned")
        exists = (
            db.query(SupervisedProject)
            .filter(
                SupervisedProject.user_id == current_user.user_id,
                SupervisedProject.project_id == request.project_id,
            )
            .first()
        )
        if not exists:
            db.add(SupervisedProject(user_id=current_user.user_id, project_id=request.project_id))

    db.commit()
    db.refresh(request)
    logger.info(
        "[supervisor] request %s request=%s supervisor=%s project=%s",
        new_status, request_id, current_user.user_id, request.project_id,
    )

    notification_service.notify(
        db,
        request.student_id,
        "request_response",
        "지도교수 요청 결과",
        f"{current_user.name} 교수님이 요청을 {'수락' if new_status == APPROVED else '거절'}했습니다.",
        "/supervisors/my-requests",
    )
    return request


def get_my_requests(db: Session, current_user: User) -> List[SupervisorRequest]:
    return (
        db.query(SupervisorRequest)
        .filter(SupervisorRequest.student_id == current_user.user_id)
        .order_by(SupervisorRequest.created_at.desc(), SupervisorRequest.request_id.desc())
        .all()
    )


def get_pending_requests(db: Session, current_user: User) -> List[SupervisorRequest]:
    # 오래된 요청부터
    return (
        db.query(SupervisorRequest)
        .filter(
            SupervisorRequest.supervisor_id == current_user.user_id,
            SupervisorRequest.status == PENDING,
        )
        .order_by(SupervisorRequest.created_at.asc(), SupervisorRequest.request_id.asc())
        .all()
    )
