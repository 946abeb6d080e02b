"""Project 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from thesisflow.database import Base
from thesisflow.utils.json_fields import load_str_list, dump_str_list


class Project(Base):
    __tablename__ = "projects"

    project_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    abstract = Column(Text)
    description = Column(Text)
    department = Column(String(100))
    year = Column(Integer)
    visibility = Column(String(20), default="public")  # public/private
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    supervisor_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    status = Column(String(30), nullable=False, default="draft")
    required_skills_json = Column("required_skills", Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    author = relationship("User", foreign_keys=[author_id], back_populates="authored_projects")
    supervisor = relationship("User", foreign_keys=[supervisor_id])
    students = relationship("ProjectStudent", back_populates="project", cascade="all, delete-orphan")
    team_members = relationship("TeamMember", back_populates="project", cascade="all, delete-orphan")
    milestones = relationship("ProjectMilestone", back_populates="project", cascade="all, delete-orphan")
    comments = relationship("ProjectComment", back_populates="project", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_project_supervisor_status", "supervisor_id", "status"),
        Index("idx_project_author", "author_id"),
    )

    @property
    def required_skills(self):
        return load_str_list(self.required_skills_json)

    @required_skills.setter
    def required_skills(self, values):
        self.required_skills_json = dump_str_list(values)

    @property
    def student_ids(self):
        return sorted(row.user_id for row in self.students)

    @property
    def author_name(self):
        return self.author.name if self.author else None

    @property
    def supervisor_name(self):
        return self.supervisor.name if self.supervisor else None


class ProjectStudent(Base):
    """과제 팀 구성원 집합(studentIds). (project_id, user_id) 유일."""

    __tablename__ = "project_student"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    added_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", back_populates="students")

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_student"),
    )
