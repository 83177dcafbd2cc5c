# grow_app/routers/tasks.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, constr
from dependency_injector.wiring import Provide, inject

from grow_app.core.containers import Container
from grow_app.growth.store import GrowthStore

logger = logging.getLogger(__name__)
router = APIRouter()

# --- Pydantic Models DEFINED LOCALLY ---
class TaskCreate(BaseModel):
    title: constr(strip_whitespace=True, min_length=1)

class TaskRead(BaseModel):
    id: str
    title: str
    completed: bool
    goal_id: str

class DeleteResponse(BaseModel):
    success: bool
# --- End Pydantic Models ---


@router.post("/{task_id}/complete", response_model=TaskRead)
@inject
async def complete_task(task_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    """Toggles the task and recomputes its goal's progress."""
    try:
        task = store.complete_task(task_id)
        if task is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Task '{task_id}' not found.")
        return TaskRead.model_validate(task.to_dict())
    except HTTPException: raise
    except Exception as e:
        logger.exception(f"Unexpected error completing task {task_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update task.")


@router.delete("/{task_id}", response_model=DeleteResponse)
@inject
async def delete_task(task_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    return DeleteResponse(success=store.delete_task(task_id))
