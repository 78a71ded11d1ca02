from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_diary
from ..schemas import Achievement, FinishedRecipe, MarkFinishedOut, RecipeSummary
from ..services.diary import DiaryService

router = APIRouter()


@router.get("/diary", response_model=list[FinishedRecipe])
async def list_finished(diary: DiaryService = Depends(get_diary)):
    """Finished recipes, most recent first."""
    return await diary.list_finished()


def finished_out(ok: bool, created: bool, str_meal: str) -> MarkFinishedOut:
    if not ok:
        raise HTTPException(status_code=500, detail="Gagal menyimpan ke Cooking Diary.")
    if not created:
        return MarkFinishedOut(created=False, message="Resep ini sudah ada di Cooking Diary kamu.")
    return MarkFinishedOut(created=True, message=f"Selamat! {str_meal} selesai dimasak. 🎉")


@router.post("/diary", response_model=MarkFinishedOut)
async def mark_finished(recipe: RecipeSummary, diary: DiaryService = Depends(get_diary)):
    ok, created = await diary.mark_finished(recipe)
    return finished_out(ok, created, recipe.str_meal)


@router.get("/diary/achievements", response_model=list[Achievement])
async def achievements(diary: DiaryService = Depends(get_diary)):
    return await diary.get_achievements()
