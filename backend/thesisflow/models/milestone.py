"""워크플로 단계별 마일스톤과 단계 코멘트 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from thesisflow.database import Base


class ProjectMilestone(Base):
    __tablename__ = "project_milestone"

    milestone_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    phase = Column(String(30), nullable=False)  # proposal/mid_defense/final_submission
    status = Column(String(20), nullable=False, default="pending")  # pending/in_progress/completed/rejected
    deadline = Column(Date)
    reviewer_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    feedback = Column(Text, default="")
    completed_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    project = relationship("Project", back_populates="milestones")
    reviewer = relationship("User")

    __table_args__ = (
        UniqueConstraint("project_id", "phase", name="uq_milestone_project_phase"),
    )

    @property
    def reviewer_name(self):
        return self.reviewer.name if self.reviewer else None


class ProjectComment(Base):
    """단계별 코멘트. 추가만 하고 수정하지 않는다."""

    __tablename__ = "project_comment"

    comment_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    phase = Column(String(30), nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", back_populates="comments")
    user = relationship("User")

    __table_args__ = (
        Index("idx_project_comment_project", "project_id", "created_at"),
    )

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def user_role(self):
        return self.user.role if self.user else None
