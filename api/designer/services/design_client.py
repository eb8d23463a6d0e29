"""Client for the generation service, used by the host-side pipeline."""

from __future__ import annotations

import logging

import httpx

from ..core.config import Settings, settings as default_settings
from ..models.exceptions import GenerationError
from ..models.schemas import DesignResponse
from .spec_parser import validate_design_payload

logger = logging.getLogger(__name__)


class DesignServerClient:
    """Requests designs from ``POST /generate-design``.

    A non-2xx status, a body that is not JSON, an unsuccessful envelope and a
    payload that breaks the design contract all surface as GenerationError.
    """

    def __init__(self, settings: Settings | None = None, base_url: str | None = None):
        self.settings = settings or default_settings
        self.base_url = (base_url or self.settings.design_server_url).rstrip("/")

    async def acquire(self, prompt: str) -> DesignResponse:
        url = f"{self.base_url}/generate-design"
        try:
            async with httpx.AsyncClient(timeout=float(self.settings.design_server_timeout)) as client:
                response = await client.post(
                    url,
                    headers={"Content-Type": "application/json"},
                    json={"prompt": prompt},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error communicating with server: {e}")
            raise GenerationError(f"Design server unreachable: {e}") from e

        if not response.is_success:
            raise GenerationError(
                f"Server responded with status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise GenerationError(
                "Server returned a non-JSON body",
                reason=GenerationError.MALFORMED_OUTPUT,
            ) from e

        if not isinstance(result, dict) or result.get("success") is not True:
            raise GenerationError(
                "Server returned unsuccessful response",
                details={"error": result.get("error") if isinstance(result, dict) else None},
            )

        return validate_design_payload(result.get("data"))
