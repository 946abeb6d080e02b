"""Project Service 도메인 서비스 레이어입니다. 과제 초안 생성/조회와 팀 구성원 집합 관리를 담당합니다."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from thesisflow.config import settings
from thesisflow.models.project import Project, ProjectStudent
from thesisflow.models.team import TeamMember
from thesisflow.models.user import User
from thesisflow.schemas.project import ProjectCreate
from thesisflow.utils.duplicate_detection import check_duplicate
from thesisflow.utils.errors import NotFound, Forbidden, ValidationError
from thesisflow.utils.permissions import can_view_project
from thesisflow.utils.workflow_states import INITIAL_STATUS
from typing import List, Optional

logger = logging.getLogger(__name__)

LEADER_ROLE = "leader"
MEMBER_ROLE = "member"


def get_project_or_404(db: Session, project_id: int) -> Project:
    project = db.query(Project).filter(Project.project_id == project_id).first()
    if not project:
        raise NotFound("과제를 찾을 수 없습니다.")
    return project


def get_project(db: Session, project_id: int, current_user: User) -> Project:
    project = get_project_or_404(db, project_id)
    if not can_view_project(project, current_user):
        raise Forbidden("이 과제에 접근할 권한이 없습니다.")
    return project


def create_project(db: Session, data: ProjectCreate, current_user: User) -> Project:
    payload = data.model_dump()
    required_skills = payload.pop("required_skills", [])
    project = Project(author_id=current_user.user_id, status=INITIAL_STATUS, **payload)
    project.required_skills = required_skills
    if project.year is None:
        project.year = datetime.now().year
    db.add(project)
    db.flush()
    # 작성자는 항상 팀원 집합과 리더 멤버십을 가진다.
    db.add(ProjectStudent(project_id=project.project_id, user_id=current_user.user_id))
    db.add(
        TeamMember(
            project_id=project.project_id,
            user_id=current_user.user_id,
            role=LEADER_ROLE,
            status="active",
            joined_at=datetime.utcnow(),
        )
    )
    db.commit()
    db.refresh(project)
    logger.info("[project] draft created project=%s author=%s", project.project_id, current_user.user_id)
    return project


def add_student(db: Session, project_id: int, user_id: int) -> bool:
    """팀원 집합에 추가한다. 이미 있으면 아무것도 하지 않고 False 를 반환한다.

    유일 제약 위반은 savepoint 만 되돌리므로 호출 측 트랜잭션은 그대로 이어진다.
    """
    try:
        with db.begin_nested():
            db.add(ProjectStudent(project_id=project_id, user_id=user_id))
    except IntegrityError:
        return False
    return True


def remove_student(db: Session, project_id: int, user_id: int) -> bool:
    deleted = (
        db.query(ProjectStudent)
        .filter(ProjectStudent.project_id == project_id, ProjectStudent.user_id == user_id)
        .delete(synchronize_session=False)
    )
    return bool(deleted)


def touch(db: Session, project_id: int):
    db.query(Project).filter(Project.project_id == project_id).update(
        {"updated_at": datetime.utcnow()},
        synchronize_session=False,
    )


def get_members(db: Session, project_id: int, current_user: User) -> List[TeamMember]:
    get_project(db, project_id, current_user)
    return (
        db.query(TeamMember)
        .filter(TeamMember.project_id == project_id, TeamMember.status != "left")
        .order_by(TeamMember.role.asc(), TeamMember.team_member_id.asc())
        .all()
    )


def check_duplicate_abstract(db: Session, abstract: str, exclude_project_id: Optional[int] = None) -> dict:
    text = (abstract or "").strip()
    if len(text) < settings.DUPLICATE_MIN_ABSTRACT_LENGTH:
        raise ValidationError(f"Abstract must be at least {settings.DUPLICATE_MIN_ABSTRACT_LENGTH} characters")

    q = db.query(Project).filter(Project.abstract.isnot(None), Project.abstract != "")
    if exclude_project_id is not None:
        q = q.filter(Project.project_id != exclude_project_id)
    result = check_duplicate(text, q.all(), settings.DUPLICATE_THRESHOLD)
    result["warning"] = (
        "Potential duplicate thesis detected. Please review similar projects before proceeding."
        if result["is_duplicate"]
        else None
    )
    return result
