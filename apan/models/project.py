# apan/models/project.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from apan.database import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    target_audience = Column(String(255), nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    budget = Column(Numeric(12, 2, asdecimal=False), nullable=True)

    # APAN-XXXX, shared by the manager so students can self-enroll
    join_code = Column(String(16), unique=True, index=True, nullable=False)

    manager_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    manager = relationship("User", back_populates="managed_projects")
    students = relationship(
        "ProjectStudent",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    goals = relationship(
        "ProjectGoal",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    actions = relationship(
        "ProjectAction",
        back_populates="project",
        cascade="all, delete-orphan",
    )


class ProjectStudent(Base):
    __tablename__ = "project_students"

    # the composite key is what rejects a second join
    project_id = Column(
        Integer, ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    student_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    project = relationship("Project", back_populates="students")
    student = relationship("User", back_populates="memberships")
