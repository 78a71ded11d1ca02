"""
Router for the user profile: Gemini API key and diet/allergy preferences.
"""

from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_profile
from ..schemas import PrefsOut, PrefsUpdate
from ..services.profile import ProfileService

router = APIRouter()


async def _prefs_out(profile: ProfileService) -> PrefsOut:
    return PrefsOut(
        preferences=await profile.get_preferences(),
        has_api_key=bool(await profile.get_api_key()),
        ai_ready=await profile.get_active_api_key() is not None,
    )


@router.get("/prefs", response_model=PrefsOut)
async def get_prefs(profile: ProfileService = Depends(get_profile)):
    """Current preferences. The API key itself is never returned."""
    return await _prefs_out(profile)


@router.put("/prefs", response_model=PrefsOut)
async def update_prefs(update: PrefsUpdate, profile: ProfileService = Depends(get_profile)):
    if not await profile.save_settings(update.api_key, update.preferences):
        raise HTTPException(status_code=500, detail="Gagal menyimpan pengaturan.")
    return await _prefs_out(profile)


@router.delete("/prefs/api-key", response_model=PrefsOut)
async def delete_api_key(profile: ProfileService = Depends(get_profile)):
    if not await profile.remove_api_key():
        raise HTTPException(status_code=500, detail="Gagal menghapus API Key.")
    return await _prefs_out(profile)
