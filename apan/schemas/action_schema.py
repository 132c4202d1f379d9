# apan/schemas/action_schema.py
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActionCreate(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    status: Optional[str] = None


class ActionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    type: str
    description: Optional[str] = None
    date: dt.date
    status: str
    created_at: dt.datetime
