# grow_app/routers/challenges.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, constr
from dependency_injector.wiring import Provide, inject

from grow_app.core.containers import Container
from grow_app.core.feature_flags import Feature, is_enabled
from grow_app.growth.store import GrowthStore

logger = logging.getLogger(__name__)
router = APIRouter()

# --- Pydantic Models DEFINED LOCALLY ---
class ChallengeCreate(BaseModel):
    title: constr(strip_whitespace=True, min_length=1)
    description: str = ""

class ChallengeRead(BaseModel):
    id: str
    title: str
    description: str
    completed: bool

class DeleteResponse(BaseModel):
    success: bool
# --- End Pydantic Models ---


@router.get("", response_model=List[ChallengeRead])
@inject
async def list_challenges(store: GrowthStore = Depends(Provide[Container.store])):
    return [ChallengeRead.model_validate(ch.to_dict()) for ch in store.get_challenges()]


@router.post("", response_model=ChallengeRead, status_code=status.HTTP_201_CREATED)
@inject
async def add_challenge(request_data: ChallengeCreate, store: GrowthStore = Depends(Provide[Container.store])):
    try:
        challenge = store.add_challenge(request_data.title, request_data.description)
        return ChallengeRead.model_validate(challenge.to_dict())
    except ValueError as val_err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(val_err))


@router.post("/daily", response_model=ChallengeRead, status_code=status.HTTP_201_CREATED)
@inject
async def generate_daily_challenge(store: GrowthStore = Depends(Provide[Container.store])):
    if not is_enabled(Feature.DAILY_CHALLENGES):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Daily challenges are disabled.")
    try:
        challenge = store.generate_daily_challenge()
        logger.info("Generated daily challenge '%s' (id: %s).", challenge.title, challenge.id)
        return ChallengeRead.model_validate(challenge.to_dict())
    except Exception as e:
        logger.exception(f"Unexpected error generating daily challenge: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate challenge.")


@router.post("/{challenge_id}/complete", response_model=ChallengeRead)
@inject
async def complete_challenge(challenge_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    challenge = store.complete_challenge(challenge_id)
    if challenge is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Challenge '{challenge_id}' not found.")
    return ChallengeRead.model_validate(challenge.to_dict())


@router.delete("/{challenge_id}", response_model=DeleteResponse)
@inject
async def delete_challenge(challenge_id: str, store: GrowthStore = Depends(Provide[Container.store])):
    return DeleteResponse(success=store.delete_challenge(challenge_id))
