"""Project 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime


class ProjectCreate(BaseModel):
    title: str = Field(min_length=10, max_length=200)
    abstract: Optional[str] = Field(default=None, max_length=2000)
    description: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=2000, le=2100)
    visibility: Literal["public", "private"] = "public"
    required_skills: List[str] = Field(default_factory=list, max_length=15)


class ProjectOut(BaseModel):
    project_id: int
    title: str
    abstract: Optional[str] = None
    description: Optional[str] = None
    department: Optional[str] = None
    year: Optional[int] = None
    visibility: str
    status: str
    author_id: int
    author_name: Optional[str] = None
    supervisor_id: Optional[int] = None
    supervisor_name: Optional[str] = None
    student_ids: List[int] = Field(default_factory=list)
    required_skills: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DuplicateCheckRequest(BaseModel):
    abstract: str
    exclude_project_id: Optional[int] = None


class DuplicateMatchOut(BaseModel):
    project_id: int
    title: str
    year: Optional[int] = None
    similarity: float


class DuplicateCheckOut(BaseModel):
    is_duplicate: bool
    matches: List[DuplicateMatchOut] = Field(default_factory=list)
    highest_match: float
    warning: Optional[str] = None
