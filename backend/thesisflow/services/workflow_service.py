"""Workflow Service 도메인 서비스 레이어입니다.

과제 상태(Project.status)의 유일한 변경 지점입니다. 제안서 제출, 지도교수 검토, 단계 진행을 처리하고
상태 변경과 마일스톤 기록을 같은 트랜잭션에서 commit 합니다.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session
from thesisflow.models.milestone import ProjectComment
from thesisflow.models.project import Project
from thesisflow.models.user import User
from thesisflow.services import milestone_service, notification_service, project_service
from thesisflow.utils.errors import Forbidden, InvalidTransition, PreconditionFailed, ValidationError
from thesisflow.utils.permissions import can_review_project, is_project_author
from thesisflow.utils import workflow_states as wf
from typing import List, Optional

logger = logging.getLogger(__name__)


def _set_status(db: Session, project: Project, expected: str, new_status: str):
    # 읽은 시점의 상태가 그대로일 때만 반영한다.
    updated = (
        db.query(Project)
        .filter(Project.project_id == project.project_id, Project.status == expected)
        .update({"status": new_status, "updated_at": datetime.utcnow()}, synchronize_session=False)
    )
    if updated != 1:
        db.rollback()
        raise PreconditionFailed("과제 상태가 변경되었습니다. 다시 조회 후 시도해 주세요.")


def _mirror_milestones(db: Session, project_id: int, source: str, target: str, actor_id: int, feedback: str = ""):
    leaving_phase = wf.MILESTONE_PHASE_BY_STATUS.get(source)
    if leaving_phase:
        if target == wf.CHANGES_REQUESTED:
            milestone_service.reject(db, project_id, leaving_phase, actor_id, feedback)
        else:
            milestone_service.complete(db, project_id, leaving_phase, actor_id, feedback)
    entering_phase = wf.MILESTONE_PHASE_BY_STATUS.get(target)
    if entering_phase:
        milestone_service.open_phase(db, project_id, entering_phase)


def submit_proposal(db: Session, project_id: int, current_user: User) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    if not is_project_author(project, current_user):
        raise Forbidden("Only project owner can submit proposal")
    if not project.supervisor_id:
        raise PreconditionFailed("Project must have a supervisor assigned before submission")
    if project.status != wf.DRAFT:
        raise PreconditionFailed(f"Cannot submit proposal from status: {project.status}")

    # draft -> pending_proposal -> supervisor_review 를 한 번에 진행한다.
    status = project.status
    for _ in range(2):
        target = wf.next_status(status, wf.ADVANCE)
        _set_status(db, project, status, target)
        status = target
    milestone_service.open_phase(db, project_id, wf.PROPOSAL_PHASE)
    db.commit()
    logger.info("[workflow] proposal submitted project=%s by=%s", project_id, current_user.user_id)

    notification_service.notify(
        db,
        project.supervisor_id,
        "proposal_submitted",
        "제안서 검토 요청",
        f"'{project.title}' 과제의 제안서가 제출되었습니다.",
        f"/projects/{project_id}",
    )
    return {
        "project_id": project_id,
        "previous_status": wf.DRAFT,
        "new_status": status,
        "message": "Proposal submitted successfully",
    }


def review_project(db: Session, project_id: int, action: str, feedback: Optional[str], current_user: User) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    if not can_review_project(project, current_user):
        raise Forbidden("Not authorized to review this project")
    if action not in wf.REVIEW_ACTIONS:
        raise ValidationError(f"Invalid action: {action}")
    feedback = (feedback or "").strip()
    if action != wf.APPROVE and not feedback:
        raise ValidationError("Feedback is required when requesting changes or rejecting")

    current = project.status
    target = wf.next_status(current, action)
    if action != wf.APPROVE and not wf.is_reviewable(current):
        target = None
    if target is None:
        raise InvalidTransition(current, None, wf.valid_transitions(current))

    _set_status(db, project, current, target)
    if action == wf.APPROVE:
        milestone_service.complete(db, project_id, wf.PROPOSAL_PHASE, current_user.user_id, feedback)
    else:
        milestone_service.reject(db, project_id, wf.PROPOSAL_PHASE, current_user.user_id, feedback)
    db.commit()
    logger.info(
        "[workflow] project reviewed project=%s action=%s %s->%s by=%s",
        project_id, action, current, target, current_user.user_id,
    )

    db.refresh(project)
    notification_service.notify_many(
        db,
        project.student_ids,
        "project_reviewed",
        "제안서 검토 결과",
        f"'{project.title}' 과제가 {'승인' if action == wf.APPROVE else '수정 요청'}되었습니다.",
        f"/projects/{project_id}",
    )
    return {
        "project_id": project_id,
        "previous_status": current,
        "new_status": target,
        "message": f"Project {'approved' if action == wf.APPROVE else 'sent back for revisions'}",
    }


def advance_phase(db: Session, project_id: int, new_phase: str, feedback: Optional[str], current_user: User) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    if not can_review_project(project, current_user):
        raise Forbidden("Not authorized")

    current = project.status
    if not wf.can_transition(current, new_phase):
        raise InvalidTransition(current, new_phase, wf.valid_transitions(current))
    feedback = (feedback or "").strip()
    if new_phase == wf.CHANGES_REQUESTED and not feedback:
        raise ValidationError("Feedback is required when requesting changes")

    _set_status(db, project, current, new_phase)
    _mirror_milestones(db, project_id, current, new_phase, current_user.user_id, feedback)
    db.commit()
    logger.info(
        "[workflow] phase advanced project=%s %s->%s by=%s",
        project_id, current, new_phase, current_user.user_id,
    )

    db.refresh(project)
    notification_service.notify_many(
        db,
        project.student_ids,
        "phase_advanced",
        "과제 단계 변경",
        f"'{project.title}' 과제가 {new_phase} 단계로 이동했습니다.",
        f"/projects/{project_id}",
    )
    return {
        "project_id": project_id,
        "previous_status": current,
        "new_status": new_phase,
        "message": f"Project advanced to {new_phase}",
    }


def get_pending_approvals(db: Session, current_user: User) -> List[Project]:
    projects = (
        db.query(Project)
        .filter(
            Project.supervisor_id == current_user.user_id,
            Project.status.in_(wf.AWAITING_SUPERVISOR),
        )
        .order_by(Project.updated_at.desc(), Project.project_id.desc())
        .all()
    )
    for project in projects:
        ids = project.student_ids or [project.author_id]
        project.team_students = db.query(User).filter(User.user_id.in_(ids)).order_by(User.user_id).all()
    return projects


def add_comment(db: Session, project_id: int, phase: str, comment: str, current_user: User) -> ProjectComment:
    project = project_service.get_project(db, project_id, current_user)
    if phase not in wf.COMMENT_PHASES:
        raise ValidationError(f"Invalid phase: {phase}")
    text = (comment or "").strip()
    if not text:
        raise ValidationError("Comment must not be empty")
    row = ProjectComment(project_id=project.project_id, user_id=current_user.user_id, phase=phase, comment=text)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_timeline(db: Session, project_id: int, current_user: User) -> dict:
    project = project_service.get_project(db, project_id, current_user)
    comments = (
        db.query(ProjectComment)
        .filter(ProjectComment.project_id == project_id)
        .order_by(ProjectComment.created_at.asc(), ProjectComment.comment_id.asc())
        .all()
    )
    return {
        "project_id": project_id,
        "status": project.status,
        "milestones": milestone_service.get_milestones(db, project_id),
        "comments": comments,
    }
