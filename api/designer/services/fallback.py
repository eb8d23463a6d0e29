"""Deterministic fallback design used whenever generation is unavailable."""

from ..models.schemas import DesignElement, DesignResponse, Fill, RGB, Theme

FALLBACK_FRAME_NAME = "Fallback Design"
DESCRIPTION_LIMIT = 100
ELLIPSIS = "..."


def _solid(r: float, g: float, b: float) -> list:
    return [Fill(type="SOLID", color=RGB(r=r, g=g, b=b))]


def truncate_prompt(prompt: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Return the prompt verbatim, or its first ``limit`` characters plus an ellipsis."""
    if len(prompt) > limit:
        return prompt[:limit] + ELLIPSIS
    return prompt


def create_fallback_design(prompt: str) -> DesignResponse:
    """Build the fixed 400x300 fallback layout for ``prompt``.

    Never fails and always returns a fresh, structurally identical tree for
    the same prompt: a title, a description echoing the prompt and an empty
    content area.
    """
    return DesignResponse(
        elements=[
            DesignElement(
                type="frame",
                x=0,
                y=0,
                width=400,
                height=300,
                name=FALLBACK_FRAME_NAME,
                fills=_solid(0.95, 0.95, 0.95),
                children=[
                    DesignElement(
                        type="text",
                        x=20,
                        y=20,
                        width=360,
                        height=40,
                        name="Title",
                        text="AI Design Generated",
                        font_size=24,
                        font_weight=600,
                        fills=_solid(0.2, 0.2, 0.2),
                    ),
                    DesignElement(
                        type="text",
                        x=20,
                        y=80,
                        width=360,
                        height=60,
                        name="Description",
                        text=truncate_prompt(prompt),
                        font_size=14,
                        font_weight=400,
                        fills=_solid(0.4, 0.4, 0.4),
                    ),
                    DesignElement(
                        type="rectangle",
                        x=20,
                        y=160,
                        width=360,
                        height=120,
                        name="Content Area",
                        fills=_solid(1, 1, 1),
                    ),
                ],
            )
        ],
        theme=Theme(
            primary_color=RGB(r=0.2, g=0.4, b=0.8),
            secondary_color=RGB(r=0.6, g=0.6, b=0.6),
            background_color=RGB(r=0.95, g=0.95, b=0.95),
        ),
    )
