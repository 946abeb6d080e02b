"""지도교수 배정 요청 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


class SupervisorRequestCreate(BaseModel):
    supervisor_id: int
    project_id: Optional[int] = None
    message: str = Field(min_length=20, max_length=500)


class SupervisorResponseRequest(BaseModel):
    action: Literal["approve", "reject"]
    response: Optional[str] = Field(default=None, max_length=500)


class SupervisorRequestOut(BaseModel):
    request_id: int
    student_id: int
    student_name: Optional[str] = None
    supervisor_id: int
    supervisor_name: Optional[str] = None
    project_id: Optional[int] = None
    project_title: Optional[str] = None
    message: str
    status: str
    supervisor_response: Optional[str] = None
    created_at: datetime
    responded_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
