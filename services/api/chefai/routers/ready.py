from fastapi import APIRouter, Depends

from ..deps import get_store
from ..infra.document_store import DocumentStore

router = APIRouter()


@router.get("/ready")
async def ready(store: DocumentStore = Depends(get_store)):
    return {"ok": True, "store_ok": await store.ping()}
