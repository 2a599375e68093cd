# Role: Thin HTTP adapter for the chat endpoint. Forwards the prompt to the ConversationController and
# returns the outcome plus the updated snapshot. A failed generation is a normal 200 with an error turn.

from fastapi import APIRouter, Depends

from gemini_chat.api.deps import get_controller
from gemini_chat.api.schemas import ChatRequest, ChatResponse, StateSnapshot
from gemini_chat.core.conversation_controller import ConversationController

router = APIRouter(tags=["chat"])


@router.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, controller: ConversationController = Depends(get_controller)) -> ChatResponse:
    outcome = await controller.submit_turn(req.prompt)
    return ChatResponse(outcome=outcome, state=StateSnapshot.from_state(controller.snapshot()))
