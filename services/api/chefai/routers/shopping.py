from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_shopping
from ..schemas import ClearCompletedOut, ShoppingItem, ShoppingItemCreate
from ..services.shopping_list import ShoppingListService

router = APIRouter()

SAVE_FAILED = "Gagal menyimpan daftar belanja."


@router.get("", response_model=list[ShoppingItem])
async def list_items(shopping: ShoppingListService = Depends(get_shopping)):
    return await shopping.get_items()


@router.post("", response_model=list[ShoppingItem])
async def add_item(item: ShoppingItemCreate, shopping: ShoppingListService = Depends(get_shopping)):
    """Add an ingredient. Re-adding the same ingredient from the same recipe is a no-op."""
    if not await shopping.add(item):
        raise HTTPException(status_code=500, detail=SAVE_FAILED)
    return await shopping.get_items()


@router.post("/{item_id}/toggle", response_model=list[ShoppingItem])
async def toggle_item(item_id: str, shopping: ShoppingListService = Depends(get_shopping)):
    if not await shopping.toggle(item_id):
        raise HTTPException(status_code=500, detail=SAVE_FAILED)
    return await shopping.get_items()


@router.delete("/{item_id}", response_model=list[ShoppingItem])
async def delete_item(item_id: str, shopping: ShoppingListService = Depends(get_shopping)):
    if not await shopping.remove(item_id):
        raise HTTPException(status_code=500, detail=SAVE_FAILED)
    return await shopping.get_items()


@router.post("/clear-completed", response_model=ClearCompletedOut)
async def clear_completed(shopping: ShoppingListService = Depends(get_shopping)):
    result = await shopping.clear_completed()
    if not result.ok:
        raise HTTPException(status_code=500, detail=SAVE_FAILED)
    if result.cleared == 0:
        return ClearCompletedOut(cleared=0, message="Belum ada item yang selesai dibeli.")
    return ClearCompletedOut(cleared=result.cleared, message="Item yang sudah dibeli telah dihapus. ✨")
