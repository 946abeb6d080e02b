"""Projects 기능 API 라우터입니다. 과제 초안 생성/조회와 초록 중복 검사를 제공합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from thesisflow.database import get_db
from thesisflow.schemas.project import ProjectCreate, ProjectOut, DuplicateCheckRequest, DuplicateCheckOut
from thesisflow.schemas.team import TeamMemberOut
from thesisflow.services import project_service
from thesisflow.middleware.auth_middleware import get_current_user, require_roles
from thesisflow.models.user import User

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.post("", response_model=ProjectOut)
def create_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return project_service.create_project(db, data, current_user)


@router.post("/check-duplicate", response_model=DuplicateCheckOut)
def check_duplicate(
    data: DuplicateCheckRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return project_service.check_duplicate_abstract(db, data.abstract, data.exclude_project_id)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.get_project(db, project_id, current_user)


@router.get("/{project_id}/members", response_model=List[TeamMemberOut])
def get_members(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.get_members(db, project_id, current_user)
