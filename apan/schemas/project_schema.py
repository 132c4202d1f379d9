# apan/schemas/project_schema.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from apan.schemas.action_schema import ActionRead
from apan.schemas.goal_schema import GoalWithProgress


# --------- For creating a project (POST) ---------
class ProjectCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = None


# --------- For updating a project (PUT) ---------
class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    target_audience: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[float] = None


class JoinProjectRequest(BaseModel):
    code: Optional[str] = None


# --------- For reading a project (GET responses) ---------
class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    target_audience: Optional[str] = None
    start_date: date
    end_date: date
    budget: Optional[float] = None
    join_code: str
    manager_id: int
    created_at: datetime


class MyProjectRead(ProjectRead):
    my_role: str


class ProjectDetail(ProjectRead):
    manager_name: str
    student_count: int
    goals: list[GoalWithProgress] = []
    actions: list[ActionRead] = []


class ProjectStudentRead(BaseModel):
    id: int
    name: str
    email: str
    role: str
    joined_at: datetime
