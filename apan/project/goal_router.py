# apan/project/goal_router.py

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apan.auth.security import get_current_user
from apan.database import get_db
from apan.models.goal import GoalProgress, ProjectGoal
from apan.schemas.goal_schema import GoalCreate, GoalProgressCreate, GoalRead
from apan.schemas.user_schema import MessageResponse, TokenUser

logger = logging.getLogger("apan.projects")

router = APIRouter(prefix="/users", tags=["goals"])


@router.post("/projects/{project_id}/goals", response_model=GoalRead, status_code=201)
def add_goal(
    project_id: int,
    data: Optional[GoalCreate] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or GoalCreate()
    if not data.title or not data.type:
        raise HTTPException(400, "Goal title and type are required.")

    goal = ProjectGoal(
        project_id=project_id,
        title=data.title,
        description=data.description,
        type=data.type,
        target_value=data.target_value,
    )
    db.add(goal)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.exception("goal_create_failed", extra={"project_id": project_id})
        raise HTTPException(500, "Error creating goal.")
    db.refresh(goal)
    return goal


# TODO: restrict to the project's manager; any authenticated user can
# delete any goal by id right now.
@router.delete("/goals/{goal_id}", response_model=MessageResponse)
def delete_goal(
    goal_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = db.get(ProjectGoal, goal_id)
    if goal is not None:
        db.delete(goal)
        db.commit()
        logger.info(
            "goal_deleted",
            extra={"goal_id": goal_id, "user_id": current_user.id},
        )
    return {"message": "Goal deleted."}


@router.post("/goals/{goal_id}/progress", response_model=MessageResponse, status_code=201)
def add_goal_progress(
    goal_id: int,
    data: Optional[GoalProgressCreate] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or GoalProgressCreate()
    # no membership check: whoever holds a token may report progress
    entry = GoalProgress(
        goal_id=goal_id,
        registered_by=current_user.id,
        current_value=data.current_value,
        comments=data.comments or None,
    )
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.exception("goal_progress_failed", extra={"goal_id": goal_id})
        raise HTTPException(500, "Error updating goal progress.")

    return {"message": "Progress registered successfully."}
