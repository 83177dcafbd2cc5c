# grow_app/routers/tree.py

import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from dependency_injector.wiring import Provide, inject

from grow_app.core.containers import Container
from grow_app.core.feature_flags import Feature, is_enabled
from grow_app.growth.store import GrowthStore
from grow_app.growth.tree_layout import TreeLayout, TreeLayoutEngine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/layout", response_model=TreeLayout)
@inject
async def get_tree_layout(
    store: GrowthStore = Depends(Provide[Container.store]),
    engine: TreeLayoutEngine = Depends(Provide[Container.tree_layout_engine]),
):
    if not is_enabled(Feature.TREE_VISUALIZATION):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Tree visualization is disabled.")
    try:
        return engine.build(store.get_habits(), store.get_goals(), store.get_challenges())
    except Exception as e:
        logger.exception(f"Unexpected error building tree layout: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to build tree layout.")


@router.get("/summary", response_model=Dict[str, int])
@inject
async def get_summary(store: GrowthStore = Depends(Provide[Container.store])):
    return store.summary()
