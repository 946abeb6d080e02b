"""Supervisors 기능 API 라우터입니다. 지도교수 배정 요청/응답을 제공합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from thesisflow.database import get_db
from thesisflow.schemas.supervisor import SupervisorRequestCreate, SupervisorResponseRequest, SupervisorRequestOut
from thesisflow.services import supervisor_service
from thesisflow.middleware.auth_middleware import require_roles
from thesisflow.models.user import User

router = APIRouter(prefix="/api/supervisors", tags=["supervisors"])


@router.post("/requests", response_model=SupervisorRequestOut)
def send_request(
    data: SupervisorRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("student")),
):
    return supervisor_service.send_request(db, data, current_user)


@router.get("/my-requests", response_model=List[SupervisorRequestOut])
def get_my_requests(db: Session = Depends(get_db), current_user: User = Depends(require_roles("student"))):
    return supervisor_service.get_my_requests(db, current_user)


@router.get("/pending-requests", response_model=List[SupervisorRequestOut])
def get_pending_requests(db: Session = Depends(get_db), current_user: User = Depends(require_roles("supervisor"))):
    return supervisor_service.get_pending_requests(db, current_user)


@router.patch("/requests/{request_id}/respond", response_model=SupervisorRequestOut)
def respond_to_request(
    request_id: int,
    data: SupervisorResponseRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("supervisor")),
):
    return supervisor_service.respond_to_request(db, request_id, data.action, data.response, current_user)
