"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from thesisflow.models.user import User, SupervisedProject
from thesisflow.models.project import Project, ProjectStudent
from thesisflow.models.supervisor_request import SupervisorRequest
from thesisflow.models.team import TeamMember, TeamMatchSnapshot, TeamMatchSuggestion
from thesisflow.models.milestone import ProjectMilestone, ProjectComment
from thesisflow.models.notification import Notification

__all__ = [
    "User", "SupervisedProject",
    "Project", "ProjectStudent",
    "SupervisorRequest",
    "TeamMember", "TeamMatchSnapshot", "TeamMatchSuggestion",
    "ProjectMilestone", "ProjectComment",
    "Notification",
]
