# apan/project/action_router.py

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apan.auth.security import get_current_user
from apan.database import get_db
from apan.models.action import ProjectAction
from apan.schemas.action_schema import ActionCreate, ActionRead
from apan.schemas.user_schema import MessageResponse, TokenUser

logger = logging.getLogger("apan.projects")

DEFAULT_STATUS = "PENDING"

router = APIRouter(prefix="/users", tags=["actions"])


@router.post("/projects/{project_id}/actions", response_model=ActionRead, status_code=201)
def add_action(
    project_id: int,
    data: Optional[ActionCreate] = Body(default=None),
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = data or ActionCreate()
    if not data.title or not data.type or not data.date:
        raise HTTPException(400, "Action title, type and date are required.")

    action = ProjectAction(
        project_id=project_id,
        title=data.title,
        type=data.type,
        description=data.description,
        date=data.date,
        status=data.status or DEFAULT_STATUS,
    )
    db.add(action)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.exception("action_create_failed", extra={"project_id": project_id})
        raise HTTPException(500, "Error registering action.")
    db.refresh(action)
    return action


# TODO: same gap as delete_goal, any authenticated user can delete by id.
@router.delete("/actions/{action_id}", response_model=MessageResponse)
def delete_action(
    action_id: int,
    current_user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    action = db.get(ProjectAction, action_id)
    if action is not None:
        db.delete(action)
        db.commit()
        logger.info(
            "action_deleted",
            extra={"action_id": action_id, "user_id": current_user.id},
        )
    return {"message": "Action deleted."}
