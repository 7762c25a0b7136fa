"""
API route aggregator: register endpoints; no logic — only delegate to handlers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.handlers import handle_chat
from app.schemas.chat import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Support agent backend running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Chat ---

@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ChatResponse}},
    tags=["chat"],
    summary="Ask the support agent",
    description="Send a customer question; receive the agent's answer and the action it took (if any). 400 on missing user_query, 500 on model failure.",
)
def post_chat(body: ChatRequest | None = None) -> JSONResponse:
    logger.info("[api:post_chat] IN  user_query=%r", body.user_query if body else None)
    return handle_chat(body)
