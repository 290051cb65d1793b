from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from calendar_backend.config import API_PREFIX
from calendar_backend.database import get_db
from calendar_backend.models.goal import DEFAULT_GOAL_COLOR
from calendar_backend.services.errors import RuleViolation
from calendar_backend.services.goal_service import GoalService

router = APIRouter(prefix=f"{API_PREFIX}/goals", tags=["Goals"])


class GoalCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1)
    color: str = DEFAULT_GOAL_COLOR
    user_id: Optional[int] = Field(default=None, alias="userId")


class GoalUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    color: Optional[str] = None
    user_id: Optional[int] = Field(default=None, alias="userId")


@router.get("")
async def list_goals(db: Session = Depends(get_db)):
    goals = GoalService.get_all(db)
    return {"success": True, "count": len(goals), "data": [g.to_dict() for g in goals]}


@router.post("", status_code=201)
async def create_goal(goal_data: GoalCreate, db: Session = Depends(get_db)):
    try:
        goal = GoalService.create(db, goal_data.model_dump())
    except RuleViolation as e:
        raise HTTPException(status_code=400, detail=e.messages)
    return {"success": True, "data": goal.to_dict()}


@router.get("/{goal_id}")
async def get_goal(goal_id: int, db: Session = Depends(get_db)):
    goal = GoalService.get_by_id(db, goal_id)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"success": True, "data": goal.to_dict()}


@router.put("/{goal_id}")
async def update_goal(goal_id: int, goal_data: GoalUpdate, db: Session = Depends(get_db)):
    try:
        goal = GoalService.update(db, goal_id, goal_data.model_dump(exclude_unset=True))
    except RuleViolation as e:
        raise HTTPException(status_code=400, detail=e.messages)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"success": True, "data": goal.to_dict()}


@router.delete("/{goal_id}")
async def delete_goal(goal_id: int, db: Session = Depends(get_db)):
    if not GoalService.delete(db, goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"success": True, "data": {}}


@router.get("/{goal_id}/tasks")
async def list_goal_tasks(goal_id: int, db: Session = Depends(get_db)):
    tasks = GoalService.get_tasks(db, goal_id)
    return {"success": True, "count": len(tasks), "data": [t.to_dict() for t in tasks]}
