# Role: FastAPI app bootstrap. Loads .env before anything reads settings, builds the single session controller
# at startup (a missing API key or bad setting aborts startup) and registers the chat/state routers.

from contextlib import asynccontextmanager

from fastapi import FastAPI

import gemini_chat.config
gemini_chat.config.load_env()
gemini_chat.config.setup_logging()

from gemini_chat.api.chat import router as chat_router
from gemini_chat.api.state import router as state_router
from gemini_chat.core.factory import build_controller


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Key line: one controller per process, so its loading flag guards every HTTP client.
    app.state.controller = build_controller()
    yield


app = FastAPI(title="Gemini Chat API", version="0.1.0", lifespan=lifespan)
app.include_router(chat_router)
app.include_router(state_router)


@app.get("/")
def root() -> dict:
    return {"service": "gemini-chat", "chat": "/chat", "state": "/state", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
