from __future__ import annotations

from typing import Optional
import secrets

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from apan.models.action import ProjectAction
from apan.models.goal import GoalProgress, ProjectGoal
from apan.models.project import Project, ProjectStudent
from apan.models.user import User
from apan.schemas.action_schema import ActionRead
from apan.schemas.goal_schema import GoalRead, GoalWithProgress
from apan.schemas.project_schema import (
    MyProjectRead,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectStudentRead,
)

JOIN_CODE_PREFIX = "APAN-"

MANAGER_ROLE = "Manager"
PARTICIPANT_ROLE = "Participant"


def generate_join_code() -> str:
    # 2 random bytes -> 4 uppercase hex digits
    return f"{JOIN_CODE_PREFIX}{secrets.token_hex(2).upper()}"


def project_role(user_id: int, manager_id: int) -> str:
    return MANAGER_ROLE if user_id == manager_id else PARTICIPANT_ROLE


def _visible_to(user_id: int):
    """Filter clause: the user manages the project or joined it."""
    joined = select(ProjectStudent.project_id).where(ProjectStudent.student_id == user_id)
    return or_(Project.manager_id == user_id, Project.id.in_(joined))


def create_project(db: Session, manager_id: int, data: ProjectCreate) -> Project:
    """Insert a project with a fresh join code.

    A join-code collision is not retried here; the caller sees the
    ``IntegrityError`` and reports it.
    """
    project = Project(
        name=data.name,
        description=data.description,
        target_audience=data.target_audience,
        start_date=data.start_date,
        end_date=data.end_date,
        budget=data.budget,
        join_code=generate_join_code(),
        manager_id=manager_id,
    )
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def list_projects_for_user(db: Session, user_id: int) -> list[MyProjectRead]:
    projects = (
        db.query(Project)
        .filter(_visible_to(user_id))
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )
    return [
        MyProjectRead(
            **ProjectRead.model_validate(p).model_dump(),
            my_role=project_role(user_id, p.manager_id),
        )
        for p in projects
    ]


def get_accessible_project(db: Session, project_id: int, user_id: int) -> Optional[Project]:
    return (
        db.query(Project)
        .filter(Project.id == project_id, _visible_to(user_id))
        .first()
    )


def get_owned_project(db: Session, project_id: int, manager_id: int) -> Optional[Project]:
    return (
        db.query(Project)
        .filter(Project.id == project_id, Project.manager_id == manager_id)
        .first()
    )


def _latest_progress(column):
    return (
        select(column)
        .where(GoalProgress.goal_id == ProjectGoal.id)
        .order_by(GoalProgress.registered_at.desc(), GoalProgress.id.desc())
        .limit(1)
        .correlate(ProjectGoal)
        .scalar_subquery()
    )


def list_goals_with_progress(db: Session, project_id: int) -> list[GoalWithProgress]:
    rows = (
        db.query(
            ProjectGoal,
            _latest_progress(GoalProgress.current_value).label("latest_value"),
            _latest_progress(GoalProgress.comments).label("latest_comment"),
        )
        .filter(ProjectGoal.project_id == project_id)
        .order_by(ProjectGoal.created_at.asc(), ProjectGoal.id.asc())
        .all()
    )
    return [
        GoalWithProgress(
            **GoalRead.model_validate(goal).model_dump(),
            latest_value=latest_value,
            latest_comment=latest_comment,
        )
        for goal, latest_value, latest_comment in rows
    ]


def list_actions(db: Session, project_id: int) -> list[ActionRead]:
    actions = (
        db.query(ProjectAction)
        .filter(ProjectAction.project_id == project_id)
        .order_by(ProjectAction.date.desc(), ProjectAction.id.desc())
        .all()
    )
    return [ActionRead.model_validate(a) for a in actions]


def get_project_detail(db: Session, project_id: int, user_id: int) -> Optional[ProjectDetail]:
    """Project plus manager name, member count, goals and actions.

    Returns None both when the project is missing and when the user is
    neither its manager nor a member.
    """
    project = get_accessible_project(db, project_id, user_id)
    if project is None:
        return None

    student_count = (
        db.query(func.count(ProjectStudent.student_id))
        .filter(ProjectStudent.project_id == project.id)
        .scalar()
    )

    return ProjectDetail(
        **ProjectRead.model_validate(project).model_dump(),
        manager_name=project.manager.name,
        student_count=int(student_count or 0),
        goals=list_goals_with_progress(db, project.id),
        actions=list_actions(db, project.id),
    )


def list_project_students(db: Session, project_id: int) -> list[ProjectStudentRead]:
    rows = (
        db.query(User.id, User.name, User.email, User.role, ProjectStudent.joined_at)
        .join(ProjectStudent, ProjectStudent.student_id == User.id)
        .filter(ProjectStudent.project_id == project_id)
        .order_by(User.name.asc())
        .all()
    )
    return [ProjectStudentRead(**row._asdict()) for row in rows]
