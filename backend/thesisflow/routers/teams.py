"""Teams 기능 API 라우터입니다. 스킬 매칭 추천과 팀 초대/응답/탈퇴를 제공합니다."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from thesisflow.database import get_db
from thesisflow.schemas.team import (
    TeamInviteCreate, TeamInviteResponse, TeamMemberOut, InviteResult,
    FindMatchesOut, TeamMatchSuggestionOut,
)
from thesisflow.services import team_service
from thesisflow.middleware.auth_middleware import get_current_user, require_roles
from thesisflow.models.user import User

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("/find-matches/{project_id}", response_model=FindMatchesOut)
def find_matches(
    project_id: int,
    min_score: int = 0,
    limit: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return team_service.find_matches(db, project_id, min_score, limit)


@router.get("/suggestions/{project_id}", response_model=List[TeamMatchSuggestionOut])
def get_suggestions(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return team_service.get_suggestions(db, project_id)


@router.post("/invite", response_model=TeamMemberOut)
def invite(
    data: TeamInviteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return team_service.invite(db, data, current_user)


@router.patch("/respond/{invite_id}", response_model=InviteResult)
def respond_to_invitation(
    invite_id: int,
    data: TeamInviteResponse,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return team_service.respond_to_invitation(db, invite_id, data.action, current_user)


@router.get("/my-teams", response_model=List[TeamMemberOut])
def get_my_teams(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return team_service.get_my_teams(db, current_user)


@router.delete("/{team_id}/leave", response_model=InviteResult)
def leave_team(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return team_service.leave_team(db, team_id, current_user)
