"""Tests for parent-image resolution."""

from overlay_agent.commands.parent_image import resolve_parent_image
from overlay_agent.commands.types import (
    Action,
    Controls,
    OverlayMode,
    ParsedCommand,
    TextOverlay,
)

PARENT = "https://img.example/parent.png"


class TestResolveParentImage:
    def test_no_parent_url_returns_command(self):
        cmd = ParsedCommand(prompt="a cat")
        assert resolve_parent_image(cmd, None) is cmd
        assert resolve_parent_image(cmd, "") is cmd

    def test_parent_url_replaces_base_image(self):
        cmd = ParsedCommand(
            action=Action.OVERLAY,
            overlay_mode=OverlayMode.DEGENIFY,
            base_image_url="https://img.example/other.png",
            use_parent_image=True,
        )
        resolved = resolve_parent_image(cmd, PARENT)
        assert resolved.base_image_url == PARENT
        assert resolved.overlay_mode == OverlayMode.DEGENIFY

    def test_generation_is_kept(self):
        cmd = ParsedCommand(action=Action.GENERATE, prompt="a castle")
        resolved = resolve_parent_image(cmd, PARENT)
        assert resolved.action == Action.GENERATE
        assert resolved.use_parent_image is False

    def test_mode_with_short_prompt_targets_parent(self):
        cmd = ParsedCommand(action=Action.OVERLAY, overlay_mode=OverlayMode.NOUNIFY, prompt="cat")
        resolved = resolve_parent_image(cmd, PARENT)
        assert resolved.use_parent_image is True
        assert resolved.action == Action.OVERLAY

    def test_mode_with_descriptive_prompt_unchanged(self):
        cmd = ParsedCommand(
            action=Action.OVERLAY,
            overlay_mode=OverlayMode.NOUNIFY,
            prompt="a very long description",
        )
        resolved = resolve_parent_image(cmd, PARENT)
        assert resolved.use_parent_image is False
        assert resolved.base_image_url == PARENT

    def test_text_only_becomes_adjust(self):
        cmd = ParsedCommand(action=Action.ADJUST, text=TextOverlay(content="gm"))
        resolved = resolve_parent_image(cmd, PARENT)
        assert resolved.action == Action.ADJUST
        assert resolved.overlay_mode is None

    def test_nothing_else_defaults_to_degenify(self):
        cmd = ParsedCommand(action=Action.ADJUST, controls=Controls(scale=2.0))
        resolved = resolve_parent_image(cmd, PARENT)
        assert resolved.overlay_mode == OverlayMode.DEGENIFY
        assert resolved.use_parent_image is True
        assert resolved.action == Action.OVERLAY
        assert resolved.controls == Controls(scale=2.0)

    def test_original_not_modified(self):
        cmd = ParsedCommand(action=Action.ADJUST)
        resolve_parent_image(cmd, PARENT)
        assert cmd.base_image_url is None
        assert cmd.overlay_mode is None
