"""Plugin message boundary.

The host delivers a single inbound event, a UI message, to one handler. The
handler turns ``submit-text`` messages into a pipeline run; every other
message type is ignored.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.config import Settings, settings as default_settings
from ..models.schemas import UIMessage, UIMessageType
from ..services.design_client import DesignServerClient
from .controller import PipelineResult, ResilienceController
from .host import SceneHost

logger = logging.getLogger(__name__)


class PluginMessageHandler:
    def __init__(self, controller: ResilienceController):
        self.controller = controller

    async def on_message(self, message: Union[UIMessage, Dict[str, Any]]) -> Optional[PipelineResult]:
        if not isinstance(message, UIMessage):
            try:
                message = UIMessage.model_validate(message)
            except PydanticValidationError as e:
                logger.warning(f"Ignoring malformed UI message: {e.error_count()} error(s)")
                return None

        if message.type != UIMessageType.SUBMIT_TEXT.value:
            logger.debug(f"Ignoring UI message of type '{message.type}'")
            return None

        return await self.controller.handle_prompt(message.text)


def create_plugin(host: SceneHost, settings: Settings | None = None) -> PluginMessageHandler:
    """Wire a host to the generation service through the resilience controller."""
    cfg = settings or default_settings
    controller = ResilienceController(
        host,
        DesignServerClient(cfg),
        font_family=cfg.default_font_family,
    )
    return PluginMessageHandler(controller)
