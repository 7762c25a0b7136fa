"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# OpenAI (agent LLM). Required: the service refuses to boot without it.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
if not OPENAI_API_KEY:
    raise RuntimeError("OPENAI_API_KEY not found. Please check your .env file.")

OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

# API timeouts (seconds), applied per model call
LLM_API_TIMEOUT: float = 60.0
LLM_CONNECT_TIMEOUT: float = 10.0

# Agent
AGENT_MAX_TOKENS: int = 512

# Server
API_HOST: str = os.getenv("API_HOST", "0.0.0.0").strip() or "0.0.0.0"
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# CORS for the chat widget (narrow to the frontend domain in production)
CORS_ALLOW_ORIGINS: list[str] = ["*"]
CORS_ALLOW_METHODS: list[str] = ["POST", "GET", "OPTIONS"]
CORS_ALLOW_HEADERS: list[str] = ["Content-Type"]
