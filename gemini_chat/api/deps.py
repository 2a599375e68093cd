# Role: Hands the process-wide ConversationController to route handlers. The controller is built once by the
# app lifespan (see gemini_chat.main); tests swap it through app.dependency_overrides.

from fastapi import Request

from gemini_chat.core.conversation_controller import ConversationController


def get_controller(request: Request) -> ConversationController:
    return request.app.state.controller
