"""Design generation endpoints."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..models.exceptions import GenerationError
from ..models.schemas import (
    ErrorResponse,
    ExamplesResponse,
    GenerateDesignResponse,
    ServiceStatus,
)
from ..services.fallback import create_fallback_design
from ..services.generator import DesignAcquirer, DesignGenerator
from ..services.prompts import EXAMPLE_PROMPTS

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="",
    tags=["Design"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid prompt"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

PROMPT_REQUIRED = "Prompt is required and must be a string"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_design_generator() -> DesignAcquirer:
    return DesignGenerator()


@router.get("/", response_model=ServiceStatus)
async def service_status():
    return ServiceStatus(message="AI Designer server is running!", timestamp=_now())


@router.post("/generate-design")
async def generate_design(request: Request, generator: DesignAcquirer = Depends(get_design_generator)):
    """
    Generate a design specification from a natural-language prompt.

    The LLM backend is tried first; when it is unavailable or returns output
    that does not match the design contract, the deterministic fallback design
    is returned instead. Either way the response is a success envelope.
    """
    try:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"error": PROMPT_REQUIRED})

        prompt = body.get("prompt") if isinstance(body, dict) else None
        if not prompt or not isinstance(prompt, str):
            return JSONResponse(status_code=400, content={"error": PROMPT_REQUIRED})

        logger.info(f"Generating design for prompt ({len(prompt)} chars)")

        try:
            design = await generator.acquire(prompt)
            logger.info("AI design generated successfully")
        except GenerationError as e:
            logger.warning(f"AI generation failed, using fallback design: {e.message}",
                           extra={"reason": e.reason})
            design = create_fallback_design(prompt)

        envelope = GenerateDesignResponse(success=True, data=design, timestamp=_now())
        return JSONResponse(content={
            **envelope.model_dump(mode="json", exclude={"data"}),
            "data": envelope.data.to_wire(),
        })

    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e)},
        )


@router.get("/examples", response_model=ExamplesResponse)
async def examples():
    return ExamplesResponse(examples=list(EXAMPLE_PROMPTS))
