"""
API handlers: read request data, call the agent, map results/errors to HTTP.

Responsibility: Bridge HTTP types and the agent flow. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so the agent stays free of FastAPI/HTTP types.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.agent.graph import run_chat
from app.core.errors import ClientInputError
from app.schemas.chat import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

MISSING_QUERY_MESSAGE = "Missing 'user_query' in request body."
APOLOGY_MESSAGE = (
    "I'm sorry, I'm currently having trouble connecting to my service. Please try again shortly."
)


def _client_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


def handle_chat(body: ChatRequest | None) -> JSONResponse:
    """
    Run the chat flow for one request. 400 on missing query, 500 (apology +
    'Server Error: ...') on any failure, 200 otherwise.
    """
    user_query = body.user_query if body is not None else None
    try:
        result = run_chat(user_query)
    except ClientInputError as e:
        logger.info("[api:chat] rejected: %s", e.message)
        return _client_error(e.message)
    except Exception as e:
        logger.exception("Chat flow failed")
        payload = ChatResponse(ai_response=APOLOGY_MESSAGE, action_taken=f"Server Error: {e}")
        return JSONResponse(status_code=500, content=payload.model_dump())
    payload = ChatResponse(ai_response=result.answer, action_taken=result.action_taken)
    return JSONResponse(status_code=200, content=payload.model_dump())


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (non-JSON, wrong types) are client input errors, not 422s."""
    logger.info("[api:validation] %s %s errors=%s", request.method, request.url.path, exc.errors())
    return _client_error(MISSING_QUERY_MESSAGE)
