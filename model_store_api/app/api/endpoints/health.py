"""
Health endpoint.

Reports which store backend is active and how many records it holds.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from model_store_api.app.api.dependencies import get_shared_store
from model_store_api.app.services.model_store import SharedModelStore

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health(shared: SharedModelStore = Depends(get_shared_store)) -> Dict[str, Any]:
    async with shared.read() as store:
        count = await store.count()
    return {"status": "ok", "backend": store.backend, "models": count}
