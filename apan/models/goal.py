# apan/models/goal.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from apan.database import Base


class ProjectGoal(Base):
    __tablename__ = "project_goals"

    id = Column(Integer, primary_key=True, index=True)

    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False)  # e.g. QUANTITATIVE / QUALITATIVE
    target_value = Column(Numeric(12, 2, asdecimal=False), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    project = relationship("Project", back_populates="goals")
    progress = relationship(
        "GoalProgress",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="GoalProgress.registered_at",
    )


class GoalProgress(Base):
    """Append-only history of measurements taken against a goal."""

    __tablename__ = "goal_progress"

    id = Column(Integer, primary_key=True, index=True)

    goal_id = Column(
        Integer, ForeignKey("project_goals.id", ondelete="CASCADE"), nullable=False, index=True
    )
    registered_by = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    current_value = Column(Numeric(12, 2, asdecimal=False), nullable=True)
    comments = Column(Text, nullable=True)

    registered_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    goal = relationship("ProjectGoal", back_populates="progress")
    author = relationship("User", back_populates="progress_entries")
