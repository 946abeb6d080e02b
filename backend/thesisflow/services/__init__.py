"""서비스 레이어 패키지 초기화 모듈입니다."""

from thesisflow.services import (
    auth_service,
    notification_service,
    project_service,
    milestone_service,
    workflow_service,
    supervisor_service,
    team_service,
)
