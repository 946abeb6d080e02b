"""Seed the database with test data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime
from thesisflow.database import SessionLocal, engine, Base
import thesisflow.models  # noqa: F401

from thesisflow.models.user import User, SupervisedProject
from thesisflow.models.project import Project, ProjectStudent
from thesisflow.models.team import TeamMember
from thesisflow.models.milestone import ProjectMilestone


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        users = [
            User(login_id="admin001", name="관리자 김철수", department="학사지원팀", role="admin", email="admin@univ.ac.kr"),
            User(login_id="sup001", name="교수 이영희", department="컴퓨터공학과", role="supervisor",
                 email="sup1@univ.ac.kr", research_areas=["Machine Learning", "Data Mining"]),
            User(login_id="sup002", name="교수 박민준", department="소프트웨어학과", role="supervisor",
                 email="sup2@univ.ac.kr", research_areas=["Distributed Systems"]),
            User(login_id="stu001", name="학생 정수연", department="컴퓨터공학과", role="student",
                 email="stu1@univ.ac.kr", skills=["Python", "React", "SQL"]),
            User(login_id="stu002", name="학생 최동현", department="컴퓨터공학과", role="student",
                 email="stu2@univ.ac.kr", skills=["Go", "React"]),
            User(login_id="stu003", name="학생 한지민", department="소프트웨어학과", role="student",
                 email="stu3@univ.ac.kr", skills=["Python", "Go", "Docker", "Kubernetes"]),
        ]
        db.add_all(users)
        db.flush()

        # Projects
        projects = [
            Project(title="강화학습 기반 수강 신청 추천 시스템", author_id=users[3].user_id,
                    supervisor_id=users[1].user_id, department="컴퓨터공학과", year=datetime.now().year,
                    abstract="학생의 이수 내역과 졸업 요건을 바탕으로 수강 과목을 추천하는 시스템을 설계하고 평가한다.",
                    status="supervisor_review", visibility="public"),
            Project(title="컨테이너 오케스트레이션 비용 최적화 연구", author_id=users[5].user_id,
                    department="소프트웨어학과", year=datetime.now().year, status="draft", visibility="public"),
        ]
        projects[0].required_skills = ["Python", "React", "Docker"]
        projects[1].required_skills = ["Go", "Kubernetes", "Docker"]
        db.add_all(projects)
        db.flush()

        for project in projects:
            db.add(ProjectStudent(project_id=project.project_id, user_id=project.author_id))
            db.add(TeamMember(project_id=project.project_id, user_id=project.author_id,
                              role="leader", status="active", joined_at=datetime.utcnow()))
        db.add(SupervisedProject(user_id=users[1].user_id, project_id=projects[0].project_id))
        db.add(ProjectMilestone(project_id=projects[0].project_id, phase="proposal", status="in_progress"))

        db.commit()
        print("Seed data inserted successfully.")
        print(f"  Users: {len(users)}")
        print(f"  Projects: {len(projects)}")
        print()
        print("Test login credentials:")
        for u in users:
            print(f"  login_id={u.login_id}  role={u.role}  name={u.name}")

    except Exception as e:
        db.rollback()
        raise e
    finally:
        db.close()


if __name__ == "__main__":
    seed()
