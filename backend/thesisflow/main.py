"""FastAPI 애플리케이션 진입점. 미들웨어와 API 라우터를 등록합니다."""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from thesisflow.config import settings
from thesisflow.database import Base, engine
import thesisflow.models  # noqa: F401 - 모델 import로 metadata 등록
from thesisflow.routers import (
    auth, projects, workflow, supervisors, teams, notifications,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="ThesisFlow 과제 수명주기 관리 시스템",
    description="졸업 과제의 지도교수 배정, 팀 구성, 단계별 승인 흐름을 관리하는 시스템",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(workflow.router)
app.include_router(supervisors.router)
app.include_router(teams.router)
app.include_router(notifications.router)


@app.on_event("startup")
def ensure_schema():
    # 신규 기능 배포 시 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "ThesisFlow"}
