"""Team Service 도메인 서비스 레이어입니다. 스킬 매칭 추천, 팀 초대/응답, 팀 탈퇴를 처리합니다."""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from thesisflow.config import settings
from thesisflow.models.project import Project
from thesisflow.models.team import TeamMember, TeamMatchSnapshot, TeamMatchSuggestion
from thesisflow.models.user import User
from thesisflow.schemas.team import TeamInviteCreate
from thesisflow.services import notification_service, project_service
from thesisflow.utils.errors import NotFound, Forbidden, PreconditionFailed, ValidationError, Conflict
from thesisflow.utils.json_fields import dump_str_list
from thesisflow.utils.permissions import STUDENT
from thesisflow.utils.team_matching import find_matching_students, group_by_match_level
from typing import List, Optional

logger = logging.getLogger(__name__)

INVITED = "invited"
ACTIVE = "active"
LEFT = "left"
MEMBER_ROLE = "member"


def _clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return settings.TEAM_MATCH_DEFAULT_LIMIT
    return max(0, min(int(limit), settings.TEAM_MATCH_MAX_LIMIT))


def _replace_snapshot(db: Session, project_id: int, min_score: int, total_matches: int, matches: List[dict]) -> TeamMatchSnapshot:
    """새 스냅샷을 쓰고 같은 트랜잭션에서 이전 스냅샷을 정리한다. 조회 측은 항상 최신 스냅샷 하나만 본다."""
    snapshot = TeamMatchSnapshot(project_id=project_id, min_score=min_score, total_matches=total_matches)
    db.add(snapshot)
    db.flush()
    for rank, match in enumerate(matches, start=1):
        db.add(
            TeamMatchSuggestion(
                snapshot_id=snapshot.snapshot_id,
                project_id=project_id,
                student_id=match["student_id"],
                rank=rank,
                match_score=match["score"],
                matched_skills_json=dump_str_list(match["matched_skills"]),
                missing_skills_json=dump_str_list(match["missing_skills"]),
            )
        )
    db.flush()

    stale = (
        db.query(TeamMatchSnapshot)
        .filter(
            TeamMatchSnapshot.project_id == project_id,
            TeamMatchSnapshot.snapshot_id != snapshot.snapshot_id,
        )
        .all()
    )
    for old in stale:
        db.delete(old)
    db.commit()
    return snapshot


def find_matches(db: Session, project_id: int, min_score: int = 0, limit: Optional[int] = None) -> dict:
    project = project_service.get_project_or_404(db, project_id)
    if min_score < 0 or min_score > 100:
        raise ValidationError("min_score must be between 0 and 100")
    required_skills = project.required_skills
    if not required_skills:
        return {
            "project_id": project_id,
            "message": "Project has no required skills specified",
            "total_matches": 0,
            "matches": [],
            "grouped_by_level": group_by_match_level([]),
        }

    team_ids = project.student_ids or [project.author_id]
    candidates = (
        db.query(User)
        .filter(
            User.role == STUDENT,
            User.is_active == True,  # noqa: E712
            ~User.user_id.in_(team_ids),
        )
        .all()
    )
    matches = find_matching_students(candidates, required_skills, min_score)
    limited = matches[:_clamp_limit(limit)]

    _replace_snapshot(db, project_id, min_score, len(matches), limited)
    logger.info(
        "[team] matches refreshed project=%s candidates=%s matched=%s cached=%s",
        project_id, len(candidates), len(matches), len(limited),
    )
    return {
        "project_id": project_id,
        "message": None,
        "total_matches": len(matches),
        "matches": limited,
        "grouped_by_level": group_by_match_level(limited),
    }


def get_current_snapshot(db: Session, project_id: int) -> Optional[TeamMatchSnapshot]:
    return (
        db.query(TeamMatchSnapshot)
        .filter(TeamMatchSnapshot.project_id == project_id)
        .order_by(TeamMatchSnapshot.snapshot_id.desc())
        .first()
    )


def get_suggestions(db: Session, project_id: int) -> List[TeamMatchSuggestion]:
    project_service.get_project_or_404(db, project_id)
    snapshot = get_current_snapshot(db, project_id)
    if not snapshot:
        return []
    return list(snapshot.suggestions)


def _active_membership(db: Session, project_id: int, user_id: int) -> Optional[TeamMember]:
    return (
        db.query(TeamMember)
        .filter(
            TeamMember.project_id == project_id,
            TeamMember.user_id == user_id,
            TeamMember.status != LEFT,
        )
        .first()
    )


def invite(db: Session, data: TeamInviteCreate, current_user: User) -> TeamMember:
    project = project_service.get_project_or_404(db, data.project_id)
    if project.author_id != current_user.user_id:
        raise Forbidden("Only project leader can invite team members")
    target = db.query(User).filter(User.user_id == data.user_id).first()
    if not target:
        raise NotFound("User not found")
    if data.user_id in project.student_ids:
        raise Conflict("User is already a team member")
    if _active_membership(db, project.project_id, data.user_id):
        raise Conflict("User has already been invited to this team")

    member = TeamMember(
        project_id=project.project_id,
        user_id=data.user_id,
        role=MEMBER_ROLE,
        status=INVITED,
        invited_by=current_user.user_id,
        message=(data.message or "").strip() or None,
    )
    db.add(member)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User has already been invited to this team")
    db.refresh(member)
    logger.info("[team] invited user=%s project=%s by=%s", data.user_id, project.project_id, current_user.user_id)

    notification_service.notify(
        db,
        data.user_id,
        "team_invite",
        "팀 초대",
        f"'{project.title}' 과제 팀에 초대되었습니다.",
        "/teams/my-teams",
    )
    return member


def respond_to_invitation(db: Session, invite_id: int, action: str, current_user: User) -> dict:
    invitation = db.query(TeamMember).filter(TeamMember.team_member_id == invite_id).first()
    if not invitation:
        raise NotFound("Invitation not found")
    if invitation.user_id != current_user.user_id:
        raise Forbidden("This invitation is not for you")
    if invitation.status != INVITED:
        raise PreconditionFailed("Invitation has already been responded to")

    project_id = invitation.project_id
    # invited 인 경우에만 응답을 반영한다. 동시 응답은 한 건만 성공한다.
    pending = db.query(TeamMember).filter(TeamMember.team_member_id == invite_id, TeamMember.status == INVITED)
    if action == "accept":
        flipped = pending.update({"status": ACTIVE, "joined_at": datetime.utcnow()}, synchronize_session=False)
        if flipped != 1:
            db.rollback()
            raise PreconditionFailed("Invitation has already been responded to")
        project_service.add_student(db, project_id, current_user.user_id)
        project_service.touch(db, project_id)
        db.commit()
        result = {"team_member_id": invite_id, "status": ACTIVE, "message": "Invitation accepted. You are now part of the team!"}
    elif action == "reject":
        # 거절된 초대는 기록을 남기지 않는다.
        if pending.delete(synchronize_session=False) != 1:
            db.rollback()
            raise PreconditionFailed("Invitation has already been responded to")
        db.commit()
        result = {"team_member_id": invite_id, "status": None, "message": "Invitation declined"}
    else:
        raise ValidationError(f"Invalid action: {action}")
    logger.info("[team] invitation %s invite=%s user=%s project=%s", action, invite_id, current_user.user_id, project_id)

    project = db.query(Project).filter(Project.project_id == project_id).first()
    if project:
        notification_service.notify(
            db,
            project.author_id,
            "invite_response",
            "팀 초대 응답",
            f"{current_user.name} 님이 초대를 {'수락' if action == 'accept' else '거절'}했습니다.",
            f"/projects/{project_id}",
        )
    return result


def leave_team(db: Session, team_id: int, current_user: User) -> dict:
    membership = (
        db.query(TeamMember)
        .filter(TeamMember.team_member_id == team_id, TeamMember.user_id == current_user.user_id)
        .first()
    )
    if not membership:
        raise NotFound("Team membership not found")
    project = project_service.get_project_or_404(db, membership.project_id)
    if membership.is_leader or project.author_id == current_user.user_id:
        raise Forbidden("Project leader cannot leave the team")
    if membership.status != ACTIVE:
        raise PreconditionFailed("Only active members can leave the team")

    membership.status = LEFT
    project_service.remove_student(db, project.project_id, current_user.user_id)
    project_service.touch(db, project.project_id)
    db.commit()
    logger.info("[team] left team=%s user=%s project=%s", team_id, current_user.user_id, project.project_id)
    return {"team_member_id": team_id, "status": LEFT, "message": "You have left the team"}


def get_my_teams(db: Session, current_user: User) -> List[TeamMember]:
    return (
        db.query(TeamMember)
        .filter(TeamMember.user_id == current_user.user_id)
        .order_by(TeamMember.created_at.desc(), TeamMember.team_member_id.desc())
        .all()
    )
