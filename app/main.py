# Run from project root: uvicorn app.main:app --reload

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.handlers import handle_validation_error
from app.api.routes import router
from app.core.config import (
    API_HOST,
    API_PORT,
    CORS_ALLOW_HEADERS,
    CORS_ALLOW_METHODS,
    CORS_ALLOW_ORIGINS,
    OPENAI_LLM_MODEL,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


app = FastAPI(title="Support Agent Backend")
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=CORS_ALLOW_METHODS,
    allow_headers=CORS_ALLOW_HEADERS,
)
app.add_exception_handler(RequestValidationError, handle_validation_error)
app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    logger.info("Support agent backend running at http://localhost:%d (model=%s)", API_PORT, OPENAI_LLM_MODEL)
    logger.info("Test with: POST http://localhost:%d/chat  {\"user_query\": \"I want to check order ABC-123\"}", API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT)
