"""Unit tests for the resilience controller."""

from unittest.mock import AsyncMock

import pytest

from designer.models.exceptions import CriticalError, GenerationError
from designer.models.schemas import DesignResponse
from designer.scene.controller import (
    DesignSource,
    Notices,
    PipelineTier,
    ResilienceController,
)
from designer.scene.memory import MemorySceneHost, PageNode
from designer.services.fallback import FALLBACK_FRAME_NAME


def _acquirer(design=None, side_effect=None):
    acquirer = AsyncMock()
    acquirer.acquire.return_value = design
    acquirer.acquire.side_effect = side_effect
    return acquirer


class BrokenHost(MemorySceneHost):
    """Host whose frame factory and viewport both fail."""

    def create_frame(self):
        raise RuntimeError("frame factory unavailable")

    def scroll_and_zoom_into_view(self, nodes):
        raise RuntimeError("viewport locked")


class LockedOncePage(PageNode):
    """Page that rejects its first insertion."""

    locked = True

    def append_child(self, node):
        if self.locked:
            self.locked = False
            raise RuntimeError("page locked")
        super().append_child(node)


class LockedPageHost(MemorySceneHost):

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._page = LockedOncePage()


class TestResilienceController:
    """Test cases for ResilienceController.handle_prompt."""

    @pytest.mark.asyncio
    async def test_generated_design_is_rendered(self, memory_host, sample_design):
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(memory_host, _acquirer(design), font_family="Inter")

        result = await controller.handle_prompt("Create a modern login form")

        assert result.succeeded
        assert result.source is DesignSource.GENERATED
        assert result.transitions == [
            PipelineTier.ACQUIRE, PipelineTier.RENDER_ALL, PipelineTier.FOCUS, PipelineTier.DONE,
        ]
        page = memory_host.current_page
        assert [node.name for node in page.children] == ["Login Form"]
        assert len(page.children[0].children) == 3
        assert memory_host.notifications == [Notices.GENERATING, Notices.SUCCESS]

    @pytest.mark.asyncio
    async def test_generation_error_uses_fallback(self, memory_host):
        acquirer = _acquirer(side_effect=GenerationError("Server responded with status: 500"))
        controller = ResilienceController(memory_host, acquirer, font_family="Inter")

        result = await controller.handle_prompt("Create a modern login form")

        assert result.succeeded
        assert result.source is DesignSource.FALLBACK
        assert PipelineTier.FALLBACK in result.transitions
        page = memory_host.current_page
        assert len(page.children) == 1
        frame = page.children[0]
        assert frame.name == FALLBACK_FRAME_NAME
        assert [child.name for child in frame.children] == ["Title", "Description", "Content Area"]
        assert frame.children[1].characters == "Create a modern login form"
        assert memory_host.notifications == [
            Notices.GENERATING, Notices.SERVER_UNAVAILABLE, Notices.SUCCESS,
        ]

    @pytest.mark.asyncio
    async def test_non_frame_roots_are_built_but_not_inserted(self, memory_host, sample_design):
        sample_design["elements"].append(
            {"type": "ellipse", "x": 0, "y": 0, "width": 40, "height": 40, "name": "Stray Dot"}
        )
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(memory_host, _acquirer(design))

        result = await controller.handle_prompt("login")

        assert [node.name for node in result.built] == ["Login Form", "Stray Dot"]
        assert [node.name for node in result.inserted] == ["Login Form"]
        assert [node.name for node in memory_host.current_page.children] == ["Login Form"]

    @pytest.mark.asyncio
    async def test_failing_root_does_not_stop_siblings(self, memory_host, sample_design):
        broken = dict(sample_design["elements"][0], name="Broken", width=0)
        sample_design["elements"].insert(0, broken)
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(memory_host, _acquirer(design))

        result = await controller.handle_prompt("login")

        assert result.succeeded
        assert [node.name for node in memory_host.current_page.children] == ["Login Form"]
        assert [failure.element_name for failure in result.failures] == ["Broken"]

    @pytest.mark.asyncio
    async def test_child_failures_are_reported(self, memory_host, sample_design):
        sample_design["elements"][0]["children"][1]["height"] = 0
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(memory_host, _acquirer(design))

        result = await controller.handle_prompt("login")

        frame = memory_host.current_page.children[0]
        assert [child.name for child in frame.children] == ["Title", "Submit Button"]
        assert [failure.element_name for failure in result.failures] == ["Email Input"]

    @pytest.mark.asyncio
    async def test_viewport_focuses_page_contents(self, memory_host, sample_design):
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(memory_host, _acquirer(design))

        await controller.handle_prompt("login")

        assert memory_host.viewport == memory_host.current_page.children

    @pytest.mark.asyncio
    async def test_any_acquisition_failure_uses_fallback(self, memory_host):
        controller = ResilienceController(memory_host, _acquirer(side_effect=RuntimeError("socket closed")))

        result = await controller.handle_prompt("Create a modern login form")

        assert result.succeeded
        assert result.source is DesignSource.FALLBACK
        assert result.transitions == [
            PipelineTier.ACQUIRE, PipelineTier.FALLBACK, PipelineTier.RENDER_ALL,
            PipelineTier.FOCUS, PipelineTier.DONE,
        ]
        assert [node.name for node in memory_host.current_page.children] == [FALLBACK_FRAME_NAME]
        assert memory_host.notifications == [
            Notices.GENERATING, Notices.SERVER_UNAVAILABLE, Notices.SUCCESS,
        ]

    @pytest.mark.asyncio
    async def test_page_insertion_failure_triggers_last_resort(self, sample_design):
        host = LockedPageHost(default_font_family="Inter")
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(host, _acquirer(design))

        result = await controller.handle_prompt("Design a pricing card")

        assert result.succeeded
        assert result.source is DesignSource.LAST_RESORT
        assert PipelineTier.LAST_RESORT in result.transitions
        assert [node.name for node in host.current_page.children] == [FALLBACK_FRAME_NAME]
        assert host.viewport == result.inserted
        assert host.notifications == [Notices.GENERATING, Notices.RETRY]

    @pytest.mark.asyncio
    async def test_last_resort_failure_is_critical(self, sample_design):
        host = BrokenHost(default_font_family="Inter")
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(host, _acquirer(design))

        result = await controller.handle_prompt("Design a pricing card")

        assert not result.succeeded
        assert result.tier is PipelineTier.CRITICAL
        assert isinstance(result.error, CriticalError)
        assert result.error.details["prompt_length"] == len("Design a pricing card")
        assert host.current_page.children == []
        assert host.notifications == [Notices.GENERATING, Notices.RETRY, Notices.CRITICAL]

    @pytest.mark.asyncio
    async def test_focus_failure_falls_to_last_resort(self, sample_design):
        class NoFocusOnceHost(MemorySceneHost):
            calls = 0

            def scroll_and_zoom_into_view(self, nodes):
                self.calls += 1
                if self.calls == 1:
                    raise RuntimeError("viewport locked")
                super().scroll_and_zoom_into_view(nodes)

        host = NoFocusOnceHost(default_font_family="Inter")
        design = DesignResponse.model_validate(sample_design)
        controller = ResilienceController(host, _acquirer(design))

        result = await controller.handle_prompt("login")

        assert result.source is DesignSource.LAST_RESORT
        assert result.succeeded
        assert [node.name for node in host.current_page.children] == ["Login Form", FALLBACK_FRAME_NAME]
