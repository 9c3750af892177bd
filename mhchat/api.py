"""
FastAPI server for the MH-CHAT pipeline.

Run:
    uvicorn mhchat.api:app --host 0.0.0.0 --port 5000
    # or with auto-reload during development:
    uvicorn mhchat.api:app --host 0.0.0.0 --port 5000 --reload
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .pipeline import ChatPipeline, InvalidInputError

logger = logging.getLogger(__name__)

CONFIG_PATH = os.environ.get("MHCHAT_CONFIG", "configs/pipeline.yaml")

_pipeline = None


def _get_pipeline() -> ChatPipeline:
    global _pipeline
    if _pipeline is None:
        if os.path.exists(CONFIG_PATH):
            logger.info("Loading pipeline from %s …", CONFIG_PATH)
            _pipeline = ChatPipeline.from_config(CONFIG_PATH)
        else:
            logger.warning("Config %s not found; using built-in defaults.", CONFIG_PATH)
            _pipeline = ChatPipeline.from_defaults()
        logger.info("Pipeline ready.")
    return _pipeline


@asynccontextmanager
async def lifespan(app: FastAPI):
    _get_pipeline()
    yield


app = FastAPI(
    title="MH-CHAT API",
    description="Supportive chat responder with distress screening",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Request / Response schemas ──────────────────────────────────────────────

class MessageRequest(BaseModel):
    message: Optional[str] = None
    username: Optional[str] = None


class UserMessage(BaseModel):
    text: str
    sender: str
    timestamp: datetime


class BotMessage(UserMessage):
    model_config = ConfigDict(populate_by_name=True)

    distress_detected: bool = Field(alias="distressDetected")


class MessageResponse(BaseModel):
    message: UserMessage
    response: BotMessage


class HistoryResponse(BaseModel):
    history: List[dict]


# ── Error handling ──────────────────────────────────────────────────────────

@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


# ── Endpoints ───────────────────────────────────────────────────────────────

router = APIRouter(prefix="/api/chat")


@app.get("/health")
def health():
    return {"status": "ok"}


@router.get("/history", response_model=HistoryResponse)
def get_history():
    # No history store is attached; the responder is single-turn.
    return HistoryResponse(history=[])


@router.post("/message", response_model=MessageResponse)
def send_message(req: Optional[MessageRequest] = None):
    pipeline = _get_pipeline()
    if req is None:
        req = MessageRequest()
    exchange = pipeline.handle_utterance(req.message, req.username)

    return MessageResponse(
        message=UserMessage(
            text=exchange.user_echo.text,
            sender=exchange.user_echo.sender,
            timestamp=exchange.user_echo.timestamp,
        ),
        response=BotMessage(
            text=exchange.bot_reply.text,
            sender=exchange.bot_reply.sender,
            timestamp=exchange.bot_reply.timestamp,
            distress_detected=exchange.bot_reply.distress_detected,
        ),
    )


app.include_router(router)
