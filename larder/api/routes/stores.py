from fastapi import APIRouter, HTTPException

from larder.infra.Store_Repository import StoreRepository
from larder.utilities.validators import StoreInput

router = APIRouter(prefix="/api/stores", tags=["stores"])


@router.get("")
def list_stores():
    return {"ok": True, "stores": StoreRepository().list_stores()}


@router.post("")
def add_store(payload: StoreInput):
    return {"ok": True, "store": StoreRepository().add_store(payload.name, payload.priority)}


@router.delete("/{store_id}")
def delete_store(store_id: str):
    if not StoreRepository().delete_store(store_id):
        raise HTTPException(status_code=404, detail="Store not found")
    return {"ok": True}
