"""팀 구성(초대/멤버십)과 스킬 매칭 추천 캐시 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from thesisflow.database import Base
from thesisflow.utils.json_fields import load_str_list
from thesisflow.utils.team_matching import match_level_for_score


class TeamMember(Base):
    __tablename__ = "team_member"

    team_member_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    role = Column(String(20), nullable=False, default="member")  # leader/member
    status = Column(String(20), nullable=False, default="invited")  # invited/active/left
    invited_by = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    message = Column(Text)
    joined_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", back_populates="team_members")
    user = relationship("User", foreign_keys=[user_id])

    __table_args__ = (
        Index("idx_team_member_project_user", "project_id", "user_id", "status"),
        # (project, user) 당 left 가 아닌 멤버십은 하나뿐이다.
        Index(
            "uq_team_member_open",
            "project_id",
            "user_id",
            unique=True,
            sqlite_where=text("status != 'left'"),
            postgresql_where=text("status != 'left'"),
        ),
    )

    @property
    def is_leader(self):
        return self.role == "leader"

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def project_title(self):
        return self.project.title if self.project else None

    @property
    def project_status(self):
        return self.project.status if self.project else None


class TeamMatchSnapshot(Base):
    """과제별 추천 결과 스냅샷. 가장 최근 스냅샷이 현재 캐시다."""

    __tablename__ = "team_match_snapshot"

    snapshot_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    min_score = Column(Integer, default=0)
    total_matches = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())

    suggestions = relationship(
        "TeamMatchSuggestion",
        back_populates="snapshot",
        cascade="all, delete-orphan",
        order_by="TeamMatchSuggestion.rank",
    )

    __table_args__ = (
        Index("idx_team_match_snapshot_project", "project_id", "snapshot_id"),
    )


class TeamMatchSuggestion(Base):
    __tablename__ = "team_match_suggestion"

    suggestion_id = Column(Integer, primary_key=True, autoincrement=True)
    snapshot_id = Column(Integer, ForeignKey("team_match_snapshot.snapshot_id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    student_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    rank = Column(Integer, nullable=False, default=0)
    match_score = Column(Integer, nullable=False, default=0)
    matched_skills_json = Column("matched_skills", Text)
    missing_skills_json = Column("missing_skills", Text)
    created_at = Column(DateTime, server_default=func.now())

    snapshot = relationship("TeamMatchSnapshot", back_populates="suggestions")
    student = relationship("User")

    @property
    def matched_skills(self):
        return load_str_list(self.matched_skills_json)

    @property
    def missing_skills(self):
        return load_str_list(self.missing_skills_json)

    @property
    def match_level(self):
        return match_level_for_score(self.match_score)

    @property
    def student_name(self):
        return self.student.name if self.student else None
