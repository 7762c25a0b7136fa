"""Schemas for the chat endpoint."""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request body for POST /chat. Stateless: each request carries only the new question."""

    user_query: str | None = Field(None, description="Customer question for the support agent.")


class ChatResponse(BaseModel):
    """Response for POST /chat (200 and 500)."""

    ai_response: str = Field(..., description="Final answer from the agent, or an apology on failure.")
    action_taken: str | None = Field(
        None,
        description="Tool executed, as name(args) -> result; 'Server Error: ...' on failure; null if no tool ran.",
    )


class ErrorResponse(BaseModel):
    """Response for POST /chat on invalid input (400)."""

    error: str
