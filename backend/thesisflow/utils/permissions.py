"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from thesisflow.models.user import User
from thesisflow.models.project import Project


ADMIN = "admin"
SUPERVISOR = "supervisor"
STUDENT = "student"

ALL_ROLES = (ADMIN, SUPERVISOR, STUDENT)


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def is_project_author(project: Project, user: User) -> bool:
    return project.author_id == user.user_id


def is_project_supervisor(project: Project, user: User) -> bool:
    return project.supervisor_id is not None and project.supervisor_id == user.user_id


def is_team_student(project: Project, user: User) -> bool:
    return user.user_id in project.student_ids


def can_review_project(project: Project, user: User) -> bool:
    return is_admin(user) or is_project_supervisor(project, user)


def can_view_project(project: Project, user: User) -> bool:
    if user.role not in ALL_ROLES:
        return False
    if project.visibility != "private":
        return True
    return (
        is_admin(user)
        or is_project_supervisor(project, user)
        or is_project_author(project, user)
        or is_team_student(project, user)
    )
