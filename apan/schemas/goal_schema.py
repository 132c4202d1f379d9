# apan/schemas/goal_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class GoalCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    target_value: Optional[float] = None


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    description: Optional[str] = None
    type: str
    target_value: Optional[float] = None
    created_at: datetime


class GoalWithProgress(GoalRead):
    latest_value: Optional[float] = None
    latest_comment: Optional[str] = None


class GoalProgressCreate(BaseModel):
    current_value: Optional[float] = None
    comments: Optional[str] = None
