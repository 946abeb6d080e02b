"""User 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class UserBase(BaseModel):
    login_id: str
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    role: str


class UserOut(UserBase):
    user_id: int
    skills: List[str] = Field(default_factory=list)
    research_areas: List[str] = Field(default_factory=list)
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    user_id: int
    name: str
    email: Optional[str] = None
    department: Optional[str] = None
    role: str

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    login_id: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
