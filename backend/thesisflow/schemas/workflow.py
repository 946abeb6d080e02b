"""Workflow(제안서 제출/검토/단계 진행) 요청/응답 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date, datetime

from thesisflow.schemas.project import ProjectOut
from thesisflow.schemas.user import UserBrief


class SubmitProposalRequest(BaseModel):
    project_id: int


class ReviewRequest(BaseModel):
    action: Literal["approve", "request_changes", "reject"]
    feedback: Optional[str] = Field(default=None, max_length=2000)


class AdvanceRequest(BaseModel):
    new_phase: str
    feedback: Optional[str] = Field(default=None, max_length=2000)


class WorkflowResult(BaseModel):
    project_id: int
    previous_status: str
    new_status: str
    message: str


class PendingApprovalOut(ProjectOut):
    team_students: List[UserBrief] = Field(default_factory=list)


class MilestoneOut(BaseModel):
    milestone_id: int
    project_id: int
    phase: str
    status: str
    deadline: Optional[date] = None
    reviewer_id: Optional[int] = None
    reviewer_name: Optional[str] = None
    feedback: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CommentCreate(BaseModel):
    phase: Literal["proposal", "supervisor_review", "mid_defense", "final_submission"]
    comment: str = Field(min_length=1, max_length=1000)


class CommentOut(BaseModel):
    comment_id: int
    project_id: int
    user_id: int
    user_name: Optional[str] = None
    user_role: Optional[str] = None
    phase: str
    comment: str
    created_at: datetime

    model_config = {"from_attributes": True}


class TimelineOut(BaseModel):
    project_id: int
    status: str
    milestones: List[MilestoneOut] = Field(default_factory=list)
    comments: List[CommentOut] = Field(default_factory=list)
