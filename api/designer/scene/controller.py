"""Resilience controller: acquisition, rendering and layered fallback.

One prompt runs through a small state machine::

    ACQUIRE --any error--> FALLBACK
       |                      |
       +----> RENDER_ALL <----+
                 |
               FOCUS --> DONE

Any unexpected exception escaping the later tiers moves the run to LAST_RESORT,
which renders only the first fallback element. If that fails too the run
ends in CRITICAL and the user is told to restart; nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from ..models.exceptions import CriticalError, ElementRenderError, GenerationError
from ..models.schemas import DesignResponse
from ..services.fallback import create_fallback_design
from ..services.generator import DesignAcquirer
from .host import SceneHost
from .renderer import SceneRenderer

logger = logging.getLogger(__name__)


class PipelineTier(str, Enum):
    ACQUIRE = "acquire"
    FALLBACK = "fallback"
    RENDER_ALL = "render_all"
    FOCUS = "focus"
    LAST_RESORT = "last_resort"
    CRITICAL = "critical"
    DONE = "done"


class DesignSource(str, Enum):
    NONE = "none"
    GENERATED = "generated"
    FALLBACK = "fallback"
    LAST_RESORT = "last_resort"


class Notices:
    GENERATING = "Generating design... Please wait."
    SERVER_UNAVAILABLE = "Server unavailable, using fallback design"
    SUCCESS = "Design generated successfully!"
    RETRY = "Error generating design. Please try again."
    CRITICAL = "Critical error: Please restart the plugin"


@dataclass
class PipelineResult:
    """Outcome of one prompt run."""
    prompt: str
    tier: PipelineTier = PipelineTier.ACQUIRE
    source: DesignSource = DesignSource.NONE
    design: Optional[DesignResponse] = None
    built: List[Any] = field(default_factory=list)
    inserted: List[Any] = field(default_factory=list)
    failures: List[ElementRenderError] = field(default_factory=list)
    error: Optional[CriticalError] = None
    transitions: List[PipelineTier] = field(default_factory=list)

    def enter(self, tier: PipelineTier) -> None:
        logger.debug(f"Pipeline tier: {self.tier.value} -> {tier.value}")
        self.tier = tier
        self.transitions.append(tier)

    @property
    def succeeded(self) -> bool:
        return self.tier is PipelineTier.DONE


class ResilienceController:
    """Turns prompts into nodes on a host, always leaving something visible."""

    def __init__(self, host: SceneHost, acquirer: DesignAcquirer, font_family: Optional[str] = None):
        self.host = host
        self.acquirer = acquirer
        self.font_family = font_family

    async def handle_prompt(self, prompt: str) -> PipelineResult:
        result = PipelineResult(prompt=prompt)
        try:
            await self._run(prompt, result)
        except Exception as e:
            logger.error(f"Error generating design: {e}", exc_info=True)
            await self._last_resort(prompt, result)
        return result

    async def _run(self, prompt: str, result: PipelineResult) -> None:
        result.enter(PipelineTier.ACQUIRE)
        self.host.notify(Notices.GENERATING)
        try:
            design = await self.acquirer.acquire(prompt)
            result.source = DesignSource.GENERATED
        except Exception as e:
            message = e.message if isinstance(e, GenerationError) else str(e)
            logger.warning(f"Generation failed, using fallback design: {message}")
            result.enter(PipelineTier.FALLBACK)
            self.host.notify(Notices.SERVER_UNAVAILABLE)
            design = create_fallback_design(prompt)
            result.source = DesignSource.FALLBACK
        result.design = design

        result.enter(PipelineTier.RENDER_ALL)
        await self._render_all(design, result)

        result.enter(PipelineTier.FOCUS)
        self.host.scroll_and_zoom_into_view(list(self.host.current_page.children))
        self.host.notify(Notices.SUCCESS)
        result.enter(PipelineTier.DONE)

    async def _render_all(self, design: DesignResponse, result: PipelineResult) -> None:
        renderer = SceneRenderer(self.host, font_family=self.font_family)
        for element in design.elements:
            try:
                node = await renderer.render(element)
            except ElementRenderError as e:
                logger.warning(f"Failed to create element: {element.name}: {e.message}")
                result.failures.append(e)
                continue

            result.built.append(node)
            # Only root frames are placed on the page
            if element.is_frame:
                self.host.current_page.append_child(node)
                result.inserted.append(node)
        result.failures.extend(renderer.failures)

    async def _last_resort(self, prompt: str, result: PipelineResult) -> None:
        result.enter(PipelineTier.LAST_RESORT)
        self.host.notify(Notices.RETRY)
        try:
            fallback = create_fallback_design(prompt)
            renderer = SceneRenderer(self.host, font_family=self.font_family)
            frame = await renderer.render(fallback.elements[0])
            self.host.current_page.append_child(frame)
            self.host.scroll_and_zoom_into_view([frame])
        except Exception as e:
            logger.error(f"Even fallback design failed: {e}", exc_info=True)
            result.enter(PipelineTier.CRITICAL)
            self.host.notify(Notices.CRITICAL)
            result.error = CriticalError(f"All fallback tiers failed: {e}", prompt_length=len(prompt))
            return

        result.design = fallback
        result.source = DesignSource.LAST_RESORT
        result.failures.extend(renderer.failures)
        result.built.append(frame)
        result.inserted.append(frame)
        result.enter(PipelineTier.DONE)
