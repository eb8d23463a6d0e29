"""Parsing of raw backend text into a DesignResponse.

The backend is instructed to emit bare JSON, but models often wrap it in a
markdown code fence anyway. Exactly one leading fence marker and one trailing
fence marker are tolerated; any other deviation is a parse failure.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from ..models.exceptions import GenerationError
from ..models.schemas import DesignResponse

logger = logging.getLogger(__name__)

JSON_FENCE = "```json"
FENCE = "```"


def strip_code_fences(text: str) -> str:
    """Remove a single enclosing code fence, if present."""
    clean = text.strip()
    if clean.startswith(JSON_FENCE):
        clean = clean[len(JSON_FENCE):]
    elif clean.startswith(FENCE):
        clean = clean[len(FENCE):]
    if clean.endswith(FENCE):
        clean = clean[:-len(FENCE)]
    return clean


def parse_design_response(text: str) -> DesignResponse:
    """Parse backend output as a design specification.

    Raises:
        GenerationError: with reason ``malformed_output`` when the text is not
            JSON or does not match the DesignResponse structure.
    """
    clean = strip_code_fences(text)
    try:
        data = json.loads(clean)
    except json.JSONDecodeError as e:
        logger.warning(f"Backend output is not valid JSON: {e}")
        raise GenerationError(
            f"Backend output is not valid JSON: {e.msg}",
            reason=GenerationError.MALFORMED_OUTPUT,
            details={"preview": clean[:200]},
        ) from e

    return validate_design_payload(data)


def validate_design_payload(data: object) -> DesignResponse:
    """Validate already-decoded JSON against the design contract."""
    try:
        return DesignResponse.model_validate(data)
    except PydanticValidationError as e:
        errors = [f"{list(err['loc'])}: {err['msg']}" for err in e.errors()]
        logger.warning(f"Design payload failed validation with {len(errors)} error(s)")
        raise GenerationError(
            "Design payload does not match the design contract",
            reason=GenerationError.MALFORMED_OUTPUT,
            details={"validation_errors": errors[:10]},
        ) from e
