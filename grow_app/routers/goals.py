# grow_app/routers/goals.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, constr
from dependency_injector.wiring import Provide, inject

from grow_app.core.containers import Container
from grow_app.growth.store import GrowthStore
from grow_app.routers.tasks import TaskCreate, TaskRead

logger = logging.getLogger(__name__)
router = APIRouter()

# --- Pydantic Models DEFINED LOCALLY ---
class GoalCreate(BaseModel):
    title: constr(strip_whitespace=True, min_length=1)
    parent_id: Optional[str] = None

class GoalRead(BaseModel):
    id: str
    title: str
    progress: int = Field(ge=0, le=100)
    parent_id: Optional[str] = None
    subgoals: List["GoalRead"] = Field(default_factory=list)
    tasks: List[TaskRead] = Field(default_factory=list)

GoalRead.model_rebuild()

class GoalDeleteResponse(BaseModel):
    success: bool
    removed_goal_ids: List[str] = Field(default_factory=list)
# --- End Pydantic Models ---


@router.get("", response_model=List[GoalRead])
@inject
async def list_goals(store: GrowthStore = Depends(Provide[Container.store])):
    """All goals; each carries its nested subgoals and tasks."""
    return [GoalRead.model_validate(g.to_dict()) for g in store.get_goals()]


@router.get("/roots", response_model=List[GoalRead])
@inject
async def list_root_goals(store: GrowthStore = Depends(Provide[Container.store])):
    return [GoalRead.model_validate(g.to_dict()) for g in store.get_root_goals()]


@router.get("/{goal_id}", response_model=GoalRead)
@inject
async def get_goal(goal_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    goal = store.get_goal(goal_id)
    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Goal '{goal_id}' not found.")
    return GoalRead.model_validate(goal.to_dict())


@router.post("", response_model=GoalRead, status_code=status.HTTP_201_CREATED)
@inject
async def add_goal(request_data: GoalCreate, store: GrowthStore = Depends(Provide[Container.store])):
    try:
        goal = store.add_goal(request_data.title, parent_id=request_data.parent_id)
        if goal is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Parent goal '{request_data.parent_id}' not found.")
        return GoalRead.model_validate(goal.to_dict())
    except HTTPException: raise
    except ValueError as val_err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(val_err))
    except Exception as e:
        logger.exception(f"Unexpected error adding goal: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add goal.")


@router.delete("/{goal_id}", response_model=GoalDeleteResponse)
@inject
async def delete_goal(goal_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    """Deletes the goal, every goal below it, and all of their tasks."""
    descendant_ids = store.get_descendant_ids(goal_id)
    success = store.delete_goal(goal_id)
    if not success:
        return GoalDeleteResponse(success=False)
    return GoalDeleteResponse(success=True, removed_goal_ids=[goal_id] + descendant_ids)


@router.post("/{goal_id}/tasks", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
@inject
async def add_task(goal_id: str, request_data: TaskCreate, store: GrowthStore = Depends(Provide[Container.store])):
    try:
        task = store.add_task(request_data.title, goal_id)
        if task is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Goal '{goal_id}' not found.")
        return TaskRead.model_validate(task.to_dict())
    except HTTPException: raise
    except ValueError as val_err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(val_err))
    except Exception as e:
        logger.exception(f"Unexpected error adding task to goal {goal_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add task.")
