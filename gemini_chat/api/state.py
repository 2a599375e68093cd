# Role: Read-only polling endpoint for clients. Never changes state, only exposes the current snapshot.

from fastapi import APIRouter, Depends

from gemini_chat.api.deps import get_controller
from gemini_chat.api.schemas import StateSnapshot
from gemini_chat.core.conversation_controller import ConversationController

router = APIRouter(tags=["state"])


@router.get("/state", response_model=StateSnapshot)
def get_state(controller: ConversationController = Depends(get_controller)) -> StateSnapshot:
    return StateSnapshot.from_state(controller.snapshot())
