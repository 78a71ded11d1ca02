from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_chat_session
from ..schemas import ChatMessage, ChatRequest
from ..services.cooking_session import ChatSession

router = APIRouter()


@router.get("/chat/{id_meal}", response_model=list[ChatMessage])
async def get_transcript(session: ChatSession = Depends(get_chat_session)):
    return await session.open()


@router.post("/chat/{id_meal}", response_model=list[ChatMessage])
async def send_message(req: ChatRequest, session: ChatSession = Depends(get_chat_session)):
    """Ask Chef AI about a recipe. Failures come back as an AI message."""
    messages = await session.send(req.question)
    if messages is None:
        raise HTTPException(status_code=422, detail="Question must not be empty")
    return messages


@router.post("/chat/{id_meal}/reset", response_model=list[ChatMessage])
async def reset_transcript(session: ChatSession = Depends(get_chat_session)):
    return await session.reset()
