"""Unit tests for the fallback design."""

import pytest

from designer.models.schemas import ElementType
from designer.services.fallback import (
    FALLBACK_FRAME_NAME,
    create_fallback_design,
    truncate_prompt,
)


def _description(design):
    frame = design.elements[0]
    return next(child for child in frame.children if child.name == "Description")


class TestFallbackDesign:
    """Test cases for create_fallback_design."""

    def test_structure(self):
        design = create_fallback_design("Create a modern login form")

        assert len(design.elements) == 1
        frame = design.elements[0]
        assert frame.element_type is ElementType.FRAME
        assert frame.name == FALLBACK_FRAME_NAME
        assert (frame.width, frame.height) == (400, 300)
        assert [c.name for c in frame.children] == ["Title", "Description", "Content Area"]
        assert [c.type for c in frame.children] == ["text", "text", "rectangle"]

    def test_deterministic(self):
        first = create_fallback_design("Design a pricing card")
        second = create_fallback_design("Design a pricing card")

        assert first == second
        assert first is not second
        assert first.elements[0] is not second.elements[0]

    def test_short_prompt_kept_verbatim(self):
        prompt = "Create a modern login form"

        assert _description(create_fallback_design(prompt)).text == prompt

    def test_prompt_of_exactly_100_chars_kept_verbatim(self):
        prompt = "a" * 100

        assert _description(create_fallback_design(prompt)).text == prompt

    def test_long_prompt_truncated_with_ellipsis(self):
        prompt = "b" * 150

        text = _description(create_fallback_design(prompt)).text

        assert text == "b" * 100 + "..."
        assert len(text) == 103

    @pytest.mark.parametrize("prompt", ["", "x", "y" * 101, "z" * 5000])
    def test_description_never_exceeds_103_chars(self, prompt):
        assert len(_description(create_fallback_design(prompt)).text) <= 103

    def test_title_is_bold_and_description_regular(self):
        frame = create_fallback_design("anything").elements[0]

        assert frame.children[0].font_weight > 500
        assert frame.children[1].font_weight <= 500

    def test_theme_present(self):
        theme = create_fallback_design("anything").theme

        assert theme.primary_color.r == 0.2
        assert theme.background_color.g == 0.95

    def test_truncate_prompt_custom_limit(self):
        assert truncate_prompt("abcdef", limit=3) == "abc..."
        assert truncate_prompt("abc", limit=3) == "abc"
