"""LLM-backed specification acquisition."""

from __future__ import annotations

import logging
from typing import Protocol

from ..core.config import Settings, settings as default_settings
from ..models.schemas import DesignResponse
from .openrouter import call_chat_completion
from .prompts import DESIGN_SYSTEM
from .spec_parser import parse_design_response

logger = logging.getLogger(__name__)


class DesignAcquirer(Protocol):
    """Anything that can turn a prompt into a design, or raise GenerationError."""

    async def acquire(self, prompt: str) -> DesignResponse:
        ...


class DesignGenerator:
    """Obtains designs from the LLM backend.

    The producer-side rules in ``DESIGN_SYSTEM`` (element count, text length,
    labels) are not re-checked here; only structural parseability is.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings

    async def acquire(self, prompt: str) -> DesignResponse:
        logger.info(f"Generating design for prompt ({len(prompt)} chars)")
        raw = await call_chat_completion(
            [
                {"role": "system", "content": DESIGN_SYSTEM},
                {"role": "user", "content": prompt},
            ],
            settings=self.settings,
        )
        design = parse_design_response(raw)
        logger.info(f"AI design generated with {len(design.elements)} root element(s)")
        return design
