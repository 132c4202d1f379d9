# apan/project/project_router.py

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apan.auth.security import get_current_user
from apan.database import get_db, is_unique_violation
from apan.models.project import Project, ProjectStudent
from apan.project import project_service
from apan.schemas.project_schema import (
    JoinProjectRequest,
    MyProjectRead,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectStudentRead,
    ProjectUpdate,
)
from apan.schemas.user_schema import MessageResponse, TokenUser

logger = logging.getLogger("apan.projects")

router = APIRouter(prefix="/users/projects", tags=["projects"])


# ==========================
#  CREATE PROJECT
# ==========================
@router.post("", response_model=ProjectRead, status_code=201)
def create_project(
    data: Optional[ProjectCreate] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or ProjectCreate()
    if not data.name or not data.start_date or not data.end_date:
        raise HTTPException(400, "Name, start date and end date are required.")

    try:
        project = project_service.create_project(db, current_user.id, data)
    except IntegrityError as exc:
        db.rollback()
        if not is_unique_violation(exc):
            raise
        logger.exception("project_create_failed", extra={"manager_id": current_user.id})
        raise HTTPException(500, "Could not generate the project code. Please try again.")

    logger.info(
        "project_created",
        extra={"project_id": project.id, "manager_id": current_user.id},
    )
    return project


# ==========================
#  MY PROJECTS
# ==========================
@router.get("", response_model=list[MyProjectRead])
def get_my_projects(
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return project_service.list_projects_for_user(db, current_user.id)


# ==========================
#  JOIN BY CODE
# ==========================
@router.post("/join", response_model=MessageResponse)
def join_project(
    data: Optional[JoinProjectRequest] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or JoinProjectRequest()
    if not data.code:
        raise HTTPException(400, "Project code is required.")

    project = db.query(Project).filter(Project.join_code == data.code).first()
    if not project:
        raise HTTPException(404, "No project found with this code.")

    if db.get(ProjectStudent, (project.id, current_user.id)) is not None:
        raise HTTPException(400, "You are already part of this project.")

    db.add(ProjectStudent(project_id=project.id, student_id=current_user.id))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # a concurrent join of the same pair; anything else is a 500
        if is_unique_violation(exc):
            raise HTTPException(400, "You are already part of this project.")
        raise

    logger.info(
        "project_joined",
        extra={"project_id": project.id, "student_id": current_user.id},
    )
    return {"message": "You joined the project successfully!"}


# ==========================
#  PROJECT DETAIL
# ==========================
@router.get("/{project_id}", response_model=ProjectDetail)
def get_project(
    project_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    detail = project_service.get_project_detail(db, project_id, current_user.id)
    if detail is None:
        raise HTTPException(404, "Project not found or access denied.")
    return detail


# ==========================
#  UPDATE PROJECT (PUT)
# ==========================
@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    data: Optional[ProjectUpdate] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or ProjectUpdate()
    # missing and not-owned answer the same way
    project = project_service.get_owned_project(db, project_id, current_user.id)
    if not project:
        raise HTTPException(
            403, "You are not allowed to edit this project or it does not exist."
        )

    # "is not None" so an empty string or 0 can still be saved
    if data.name is not None:
        project.name = data.name
    if data.description is not None:
        project.description = data.description
    if data.target_audience is not None:
        project.target_audience = data.target_audience
    if data.start_date is not None:
        project.start_date = data.start_date
    if data.end_date is not None:
        project.end_date = data.end_date
    if data.budget is not None:
        project.budget = data.budget

    db.commit()
    db.refresh(project)
    return project


# ==========================
#  DELETE PROJECT
# ==========================
@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    project = project_service.get_owned_project(db, project_id, current_user.id)
    if not project:
        raise HTTPException(
            403, "You are not allowed to delete this project or it does not exist."
        )

    db.delete(project)
    db.commit()

    logger.info("project_deleted", extra={"project_id": project_id})
    return {"message": "Project deleted successfully."}


# ==========================
#  MEMBERS
# ==========================
@router.get("/{project_id}/students", response_model=list[ProjectStudentRead])
def get_project_students(
    project_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return project_service.list_project_students(db, project_id)
