"""SupervisorRequest 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from thesisflow.database import Base


class SupervisorRequest(Base):
    __tablename__ = "supervisor_request"

    request_id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    supervisor_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=True)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending/approved/rejected
    supervisor_response = Column(Text, default="")
    created_at = Column(DateTime, server_default=func.now())
    responded_at = Column(DateTime)

    student = relationship("User", foreign_keys=[student_id])
    supervisor = relationship("User", foreign_keys=[supervisor_id])
    project = relationship("Project")

    __table_args__ = (
        Index("idx_supervisor_request_triple", "student_id", "supervisor_id", "project_id", "status"),
        Index("idx_supervisor_request_inbox", "supervisor_id", "status", "created_at"),
    )

    @property
    def is_pending(self):
        return self.status == "pending"

    @property
    def student_name(self):
        return self.student.name if self.student else None

    @property
    def supervisor_name(self):
        return self.supervisor.name if self.supervisor else None

    @property
    def project_title(self):
        return self.project.title if self.project else None
