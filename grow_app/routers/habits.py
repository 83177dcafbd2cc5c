# grow_app/routers/habits.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, constr
from dependency_injector.wiring import Provide, inject

from grow_app.core.containers import Container
from grow_app.growth.store import GrowthStore

logger = logging.getLogger(__name__)
router = APIRouter()

# --- Pydantic Models DEFINED LOCALLY ---
class HabitCreate(BaseModel):
    title: constr(strip_whitespace=True, min_length=1)

class HabitRead(BaseModel):
    id: str
    title: str
    streak: int
    completed: bool

class DeleteResponse(BaseModel):
    success: bool
# --- End Pydantic Models ---


@router.get("", response_model=List[HabitRead])
@inject
async def list_habits(store: GrowthStore = Depends(Provide[Container.store])):
    return [HabitRead.model_validate(h.to_dict()) for h in store.get_habits()]


@router.post("", response_model=HabitRead, status_code=status.HTTP_201_CREATED)
@inject
async def add_habit(request_data: HabitCreate, store: GrowthStore = Depends(Provide[Container.store])):
    try:
        habit = store.add_habit(request_data.title)
        return HabitRead.model_validate(habit.to_dict())
    except ValueError as val_err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(val_err))
    except Exception as e:
        logger.exception(f"Unexpected error adding habit: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to add habit.")


@router.post("/{habit_id}/complete", response_model=HabitRead)
@inject
async def complete_habit(habit_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    try:
        habit = store.complete_habit(habit_id)
        if habit is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Habit '{habit_id}' not found.")
        return HabitRead.model_validate(habit.to_dict())
    except HTTPException: raise
    except Exception as e:
        logger.exception(f"Unexpected error completing habit {habit_id}: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update habit.")


@router.delete("/{habit_id}", response_model=DeleteResponse)
@inject
async def delete_habit(habit_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    success = store.delete_habit(habit_id)
    logger.info("Delete habit %s: %s", habit_id, "removed" if success else "not found")
    return DeleteResponse(success=success)
