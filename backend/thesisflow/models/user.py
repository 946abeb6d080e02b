"""User 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from thesisflow.database import Base
from thesisflow.utils.json_fields import load_str_list, dump_str_list


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    login_id = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(100))
    department = Column(String(100))
    role = Column(String(20), nullable=False, default="student")  # student/supervisor/admin
    skills_json = Column("skills", Text)
    research_areas_json = Column("research_areas", Text)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    authored_projects = relationship("Project", foreign_keys="Project.author_id", back_populates="author")
    supervised = relationship("SupervisedProject", back_populates="supervisor", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user")

    @property
    def skills(self):
        return load_str_list(self.skills_json)

    @skills.setter
    def skills(self, values):
        self.skills_json = dump_str_list(values)

    @property
    def research_areas(self):
        return load_str_list(self.research_areas_json)

    @research_areas.setter
    def research_areas(self, values):
        self.research_areas_json = dump_str_list(values)


class SupervisedProject(Base):
    __tablename__ = "supervised_project"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.project_id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    supervisor = relationship("User", back_populates="supervised")

    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_supervised_project"),
    )
