# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mailshield

"""FastAPI server implementation for the Mailshield redaction service.

This module provides the HTTP interface used by the email orchestrator,
exposing endpoints for analysis, redaction, restoration, mapping cleanup and
health checks.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from coreason_mailshield.config import settings
from coreason_mailshield.main import Redactor
from coreason_mailshield.models import PIIAnalysis, RedactionResult
from coreason_mailshield.utils.logger import logger


class AnalyzeRequest(BaseModel):
    """Request model for analyzing text."""

    text: Optional[str] = None


class RedactRequest(BaseModel):
    """Request model for redacting an email body."""

    text: Optional[str] = None
    conversation_id: str


class RestoreRequest(BaseModel):
    """Request model for restoring an AI response."""

    text: Optional[str] = None
    conversation_id: str


class RestoreResponse(BaseModel):
    """Response model containing restored text."""

    text: str


class ClearRequest(BaseModel):
    """Request model for dropping a conversation mapping."""

    conversation_id: str


class ClearResponse(BaseModel):
    """Response model confirming the mapping was dropped."""

    status: str
    conversation_id: str


class HealthResponse(BaseModel):
    """Response model for service health check."""

    status: str
    categories: int


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Creates the shared Redactor on startup."""
    app.state.redactor = Redactor()
    yield


app = FastAPI(lifespan=lifespan)


def _require_conversation_id(conversation_id: str) -> None:
    if settings.server_require_conversation_id and not conversation_id.strip():
        raise HTTPException(status_code=400, detail="conversation_id must not be blank")


@app.post("/analyze", response_model=PIIAnalysis)
async def analyze(request: AnalyzeRequest) -> PIIAnalysis:
    """Reports which PII categories occur in the text."""
    try:
        result: PIIAnalysis = app.state.redactor.analyze(request.text)
        return result
    except Exception as e:
        logger.error(f"Analysis failed: {type(e).__name__}")
        raise HTTPException(status_code=500, detail="Internal Server Error") from e


@app.post("/redact", response_model=RedactionResult)
async def redact(request: RedactRequest) -> RedactionResult:
    """Redacts PII from an email body and stores the mapping for the conversation.

    Raises:
        HTTPException: 400 for a blank conversation id, 500 on unexpected failure.
    """
    _require_conversation_id(request.conversation_id)
    try:
        result: RedactionResult = app.state.redactor.redact(request.text, request.conversation_id)
        return result
    except Exception as e:
        logger.error(f"Redaction failed for conversation {request.conversation_id}: {type(e).__name__}")
        raise HTTPException(status_code=500, detail="Internal Server Error") from e


@app.post("/restore", response_model=RestoreResponse)
async def restore(request: RestoreRequest) -> RestoreResponse:
    """Restores tokens in an AI response for the conversation."""
    _require_conversation_id(request.conversation_id)
    try:
        text = app.state.redactor.restore(request.text, request.conversation_id)
        return RestoreResponse(text=text)
    except Exception as e:
        logger.error(f"Restore failed for conversation {request.conversation_id}: {type(e).__name__}")
        raise HTTPException(status_code=500, detail="Internal Server Error") from e


@app.post("/clear", response_model=ClearResponse)
async def clear(request: ClearRequest) -> ClearResponse:
    """Drops the stored mapping for the conversation."""
    _require_conversation_id(request.conversation_id)
    app.state.redactor.clear(request.conversation_id)
    return ClearResponse(status="cleared", conversation_id=request.conversation_id)


@app.get("/health", response_model=HealthResponse)
async def health() -> Dict[str, object]:
    """Checks that the redactor is initialized.

    Raises:
        HTTPException: 503 if the redactor is missing or broken.
    """
    redactor = getattr(app.state, "redactor", None)
    if redactor is None:
        raise HTTPException(status_code=503, detail="Redactor not initialized")
    try:
        categories = len(redactor.scanner.categories)
    except Exception as e:
        raise HTTPException(status_code=503, detail="Unhealthy") from e
    return {"status": "protected", "categories": categories}
