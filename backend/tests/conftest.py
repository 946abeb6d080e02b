import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from thesisflow.database import Base, get_db
from thesisflow.main import app
from thesisflow.models.user import User
from thesisflow.models.project import Project

TEST_DB_URL = "sqlite:///./test_thesisflow.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "student": User(login_id="stu001", name="Student One", role="student", department="CS", skills=["Python", "React"]),
        "student2": User(login_id="stu002", name="Student Two", role="student", department="CS", skills=["go", "react"]),
        "student3": User(
            login_id="stu003", name="Student Three", role="student", department="SE",
            skills=["Python", "Go", "React", "Docker"],
        ),
        "supervisor": User(login_id="sup001", name="Prof Kim", role="supervisor", department="CS", research_areas=["ML"]),
        "supervisor2": User(login_id="sup002", name="Prof Lee", role="supervisor", department="SE"),
        "admin": User(login_id="admin001", name="Admin", role="admin", department="Office"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


def get_token(client, login_id: str) -> str:
    resp = client.post("/api/auth/login", json={"login_id": login_id})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, login_id: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, login_id)}"}


def create_project(client, headers: dict, **overrides) -> dict:
    payload = {
        "title": "Distributed Thesis Tracker",
        "abstract": "A platform for tracking thesis projects.",
        "department": "CS",
        "required_skills": ["Go", "React", "Docker", "Kubernetes"],
    }
    payload.update(overrides)
    resp = client.post("/api/projects", json=payload, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()


def assign_supervisor(db, project_id: int, supervisor: User):
    db.query(Project).filter(Project.project_id == project_id).update({"supervisor_id": supervisor.user_id})
    db.commit()
