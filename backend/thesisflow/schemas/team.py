"""팀 구성/매칭 요청·응답 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Dict
from datetime import datetime


class TeamInviteCreate(BaseModel):
    project_id: int
    user_id: int
    message: Optional[str] = Field(default=None, max_length=500)


class TeamInviteResponse(BaseModel):
    action: Literal["accept", "reject"]


class TeamMemberOut(BaseModel):
    team_member_id: int
    project_id: int
    project_title: Optional[str] = None
    project_status: Optional[str] = None
    user_id: int
    user_name: Optional[str] = None
    role: str
    status: str
    invited_by: Optional[int] = None
    message: Optional[str] = None
    joined_at: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class InviteResult(BaseModel):
    team_member_id: int
    status: Optional[str] = None
    message: str


class MatchCandidateOut(BaseModel):
    student_id: int
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    score: int
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    total_required: int
    match_level: str


class FindMatchesOut(BaseModel):
    project_id: int
    message: Optional[str] = None
    total_matches: int = 0
    matches: List[MatchCandidateOut] = Field(default_factory=list)
    grouped_by_level: Dict[str, List[MatchCandidateOut]] = Field(default_factory=dict)


class TeamMatchSuggestionOut(BaseModel):
    suggestion_id: int
    project_id: int
    student_id: int
    student_name: Optional[str] = None
    rank: int
    match_score: int
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    match_level: str
    created_at: datetime

    model_config = {"from_attributes": True}
