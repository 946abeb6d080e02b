"""Milestone Service 도메인 서비스 레이어입니다.

(project_id, phase) 단위로 마일스톤을 기록합니다. 단계 순서는 검증하지 않으며 워크플로 서비스가 요청한 대로 반영합니다.
commit 은 호출 측 트랜잭션에서 수행합니다.
"""

from datetime import datetime
from sqlalchemy.orm import Session
from thesisflow.models.milestone import ProjectMilestone
from typing import List, Optional


def get_milestone(db: Session, project_id: int, phase: str) -> Optional[ProjectMilestone]:
    return (
        db.query(ProjectMilestone)
        .filter(ProjectMilestone.project_id == project_id, ProjectMilestone.phase == phase)
        .first()
    )


def _get_or_create(db: Session, project_id: int, phase: str) -> ProjectMilestone:
    milestone = get_milestone(db, project_id, phase)
    if milestone:
        return milestone
    milestone = ProjectMilestone(project_id=project_id, phase=phase, status="pending", feedback="")
    db.add(milestone)
    db.flush()
    return milestone


def open_phase(db: Session, project_id: int, phase: str) -> ProjectMilestone:
    """단계를 진행 중으로 연다. 재제출로 다시 열리는 경우 이전 검토 결과를 비운다."""
    milestone = _get_or_create(db, project_id, phase)
    milestone.status = "in_progress"
    milestone.completed_at = None
    milestone.updated_at = datetime.utcnow()
    return milestone


def complete(db: Session, project_id: int, phase: str, reviewer_id: Optional[int], feedback: Optional[str] = "") -> ProjectMilestone:
    milestone = _get_or_create(db, project_id, phase)
    now = datetime.utcnow()
    milestone.status = "completed"
    milestone.reviewer_id = reviewer_id
    milestone.feedback = feedback or ""
    milestone.completed_at = now
    milestone.updated_at = now
    return milestone


def reject(db: Session, project_id: int, phase: str, reviewer_id: Optional[int], feedback: Optional[str]) -> ProjectMilestone:
    milestone = _get_or_create(db, project_id, phase)
    milestone.status = "rejected"
    milestone.reviewer_id = reviewer_id
    milestone.feedback = feedback or ""
    milestone.updated_at = datetime.utcnow()
    return milestone


def get_milestones(db: Session, project_id: int) -> List[ProjectMilestone]:
    return (
        db.query(ProjectMilestone)
        .filter(ProjectMilestone.project_id == project_id)
        .order_by(ProjectMilestone.created_at.asc(), ProjectMilestone.milestone_id.asc())
        .all()
    )
