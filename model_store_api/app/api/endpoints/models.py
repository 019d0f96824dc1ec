"""
Model record endpoints.

All three routes live at ``/model``:

* ``POST``   creates a record from ``{name, version, data}``;
* ``GET``    lists every record;
* ``DELETE`` removes the record whose ID is given as ``{id}``.

Writes take the store's write lock and reads take its read lock.  A
store‑level write failure still answers HTTP 200 with the usual success
string unless ``strict_writes`` is enabled, in which case it becomes
HTTP 500.  Bodies that fail to decode never reach these handlers;
FastAPI rejects them with HTTP 422.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from model_store_api.app.api.dependencies import get_settings, get_shared_store
from model_store_api.app.core.config import Settings
from model_store_api.app.schemas.model import ModelCreate, ModelDelete, ModelRead
from model_store_api.app.services.model_store import SharedModelStore

router = APIRouter()

CREATE_SUCCESS = "create success"
DELETE_SUCCESS = "delete success"


@router.post("", response_model=str)
async def create_model(
    model_in: ModelCreate,
    shared: SharedModelStore = Depends(get_shared_store),
    config: Settings = Depends(get_settings),
) -> str:
    """Create a new model record."""
    async with shared.write() as store:
        model = await store.add(model_in.name, model_in.version, model_in.data)
    if model is None and config.strict_writes:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create model",
        )
    return CREATE_SUCCESS


@router.get("", response_model=List[ModelRead])
async def list_models(shared: SharedModelStore = Depends(get_shared_store)) -> List[ModelRead]:
    """Return every stored model record."""
    async with shared.read() as store:
        return await store.list_models()


@router.delete("", response_model=str)
async def delete_model(
    model_in: ModelDelete,
    shared: SharedModelStore = Depends(get_shared_store),
    config: Settings = Depends(get_settings),
) -> str:
    """Delete a model record by ID.

    Deleting an ID that does not exist succeeds and changes nothing.
    """
    async with shared.write() as store:
        deleted = await store.delete(model_in.id)
    if not deleted and config.strict_writes:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete model",
        )
    return DELETE_SUCCESS
