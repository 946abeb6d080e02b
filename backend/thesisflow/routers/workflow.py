"""Workflow 기능 API 라우터입니다. 제안서 제출, 검토, 단계 진행, 단계 코멘트/타임라인을 제공합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from thesisflow.database import get_db
from thesisflow.schemas.workflow import (
    SubmitProposalRequest, ReviewRequest, AdvanceRequest, WorkflowResult,
    PendingApprovalOut, CommentCreate, CommentOut, TimelineOut,
)
from thesisflow.services import workflow_service
from thesisflow.middleware.auth_middleware import get_current_user, require_roles
from thesisflow.models.user import User

router = APIRouter(prefix="/api/workflow", tags=["workflow"])


@router.get("/pending", response_model=List[PendingApprovalOut])
def get_pending_approvals(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("supervisor", "admin")),
):
    return workflow_service.get_pending_approvals(db, current_user)


@router.post("/submit-proposal", response_model=WorkflowResult)
def submit_proposal(
    data: SubmitProposalRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return workflow_service.submit_proposal(db, data.project_id, current_user)


@router.patch("/{project_id}/review", response_model=WorkflowResult)
def review_project(
    project_id: int,
    data: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("supervisor", "admin")),
):
    return workflow_service.review_project(db, project_id, data.action, data.feedback, current_user)


@router.patch("/{project_id}/advance", response_model=WorkflowResult)
def advance_phase(
    project_id: int,
    data: AdvanceRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("supervisor", "admin")),
):
    return workflow_service.advance_phase(db, project_id, data.new_phase, data.feedback, current_user)


@router.post("/{project_id}/comments", response_model=CommentOut)
def add_comment(
    project_id: int,
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return workflow_service.add_comment(db, project_id, data.phase, data.comment, current_user)


@router.get("/{project_id}/timeline", response_model=TimelineOut)
def get_timeline(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return workflow_service.get_timeline(db, project_id, current_user)
