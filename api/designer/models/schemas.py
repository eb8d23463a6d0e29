"""Pydantic models for the design specification contract.

This module defines the structural contract shared by every producer of a
design (the LLM backend, the fallback synthesizer) and its one consumer, the
scene renderer, plus the request/response envelopes of the generation
service and the plugin UI messages.

The contract is strict about structure (required keys, container types) and
loose about values: numeric ranges are not checked and an unknown element
``type`` is kept as-is so the renderer can degrade it to a rectangle.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ElementType(str, Enum):
    """Node kinds the renderer knows how to build."""
    FRAME = "frame"
    RECTANGLE = "rectangle"
    TEXT = "text"
    ELLIPSE = "ellipse"
    LINE = "line"

    @classmethod
    def from_value(cls, value: str) -> Optional["ElementType"]:
        """Return the matching member, or None for values outside the enumeration."""
        try:
            return cls(value)
        except ValueError:
            return None


class RGB(BaseModel):
    """Color triple in the normalized 0-1 range."""
    r: float
    g: float
    b: float


class Fill(BaseModel):
    """A paint entry. Only ``color`` is honoured; every fill renders as SOLID."""
    type: str = Field("SOLID", description="Paint kind as supplied upstream")
    color: RGB


class DesignElement(BaseModel):
    """A node in the specification tree."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="frame | rectangle | text | ellipse | line")
    x: float
    y: float
    width: float
    height: float
    name: str = Field(..., description="Display label set on the rendered node")
    fills: Optional[List[Fill]] = None
    text: Optional[str] = None
    font_size: Optional[float] = Field(None, alias="fontSize")
    font_weight: Optional[float] = Field(None, alias="fontWeight")
    children: Optional[List[DesignElement]] = None

    @property
    def element_type(self) -> Optional[ElementType]:
        return ElementType.from_value(self.type)

    @property
    def is_frame(self) -> bool:
        return self.element_type is ElementType.FRAME


class Theme(BaseModel):
    """Palette metadata forwarded with a design; not applied by the renderer."""

    model_config = ConfigDict(populate_by_name=True)

    primary_color: RGB = Field(..., alias="primaryColor")
    secondary_color: RGB = Field(..., alias="secondaryColor")
    background_color: RGB = Field(..., alias="backgroundColor")


class DesignResponse(BaseModel):
    """Root of a design specification: root elements plus theme."""
    elements: List[DesignElement]
    theme: Theme

    def to_wire(self) -> dict:
        """Serialize with camelCase keys and without unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DesignElement.model_rebuild()


# ---------------------------------------------------------------------------
# Generation service envelopes
# ---------------------------------------------------------------------------

class GenerateDesignRequest(BaseModel):
    """Body of ``POST /generate-design``."""
    prompt: str = Field(..., min_length=1, description="Natural-language design request")


class GenerateDesignResponse(BaseModel):
    """Success envelope of ``POST /generate-design``."""
    success: bool = True
    data: DesignResponse
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None


class ExamplesResponse(BaseModel):
    examples: List[str]


class ServiceStatus(BaseModel):
    message: str
    timestamp: str


# ---------------------------------------------------------------------------
# Plugin UI messages
# ---------------------------------------------------------------------------

class UIMessageType(str, Enum):
    SUBMIT_TEXT = "submit-text"


class UIMessage(BaseModel):
    """Inbound message posted by the plugin UI."""
    type: str
    text: str = ""
