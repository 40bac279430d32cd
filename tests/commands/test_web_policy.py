"""Tests for the web-form channel (web, frame, telegram, default)."""

import pytest

from overlay_agent.commands import parse_command
from overlay_agent.commands.types import Action, OverlayMode, TextOverlay


def web(instruction):
    return parse_command(instruction, "web")


class TestStructuredSections:
    def test_bracketed_sections(self):
        cmd = web("[PROMPT]: a dog [OVERLAY]: higherify scale to 1.5 [TEXT]: Woof, top")
        assert cmd.prompt == "a dog"
        assert cmd.overlay_mode == OverlayMode.HIGHERIFY
        assert cmd.action == Action.OVERLAY
        assert cmd.controls.scale == 1.5
        assert cmd.text == TextOverlay(content="Woof", position="top")

    def test_text_section_vocabulary(self):
        cmd = web("[TEXT]: Hello, bottom-right, size 32, color yellow, bold")
        assert cmd.text == TextOverlay(
            content="Hello",
            position="bottom-right",
            font_size=32,
            color="yellow",
            style="bold",
        )
        assert cmd.action == Action.ADJUST

    def test_text_section_style_keyword(self):
        cmd = web("[TEXT]: gm, style serif")
        assert cmd.text.style == "serif"

    def test_bare_headers(self):
        cmd = web("PROMPT: a castle\nOVERLAY: use baseify")
        assert cmd.prompt == "a castle"
        assert cmd.overlay_mode == OverlayMode.BASEIFY
        assert cmd.action == Action.OVERLAY

    def test_legacy_headers(self):
        cmd = web("WOWOW: a neon city CAPTION: gm")
        assert cmd.prompt == "a neon city"
        assert cmd.text == TextOverlay(content="gm")
        assert cmd.action == Action.GENERATE

    def test_url_in_prompt_section(self):
        cmd = web("[PROMPT]: https://img.example/a.png a sunny field [OVERLAY]: nounify")
        assert cmd.base_image_url == "https://img.example/a.png"
        assert cmd.prompt == "a sunny field"
        assert cmd.overlay_mode == OverlayMode.NOUNIFY

    def test_generation_filler_is_stripped(self):
        cmd = web("[PROMPT]: generate an image of a lighthouse")
        assert cmd.prompt == "a lighthouse"

    def test_overlay_section_opacity(self):
        cmd = web("[OVERLAY]: scrollify, opacity 40")
        assert cmd.overlay_mode == OverlayMode.SCROLLIFY
        assert cmd.controls.overlay_alpha == pytest.approx(0.4)


class TestFreeText:
    def test_generation(self):
        cmd = web("generate a sunset over mountains")
        assert cmd.action == Action.GENERATE
        assert cmd.prompt == "sunset over mountains"

    def test_create_an_image_of(self):
        cmd = web("create an image of a dragon")
        assert cmd.prompt == "dragon"

    def test_photograph_narrows_prompt(self):
        cmd = web("https://img.example/x.png a photograph of a red barn")
        assert cmd.prompt == "a red barn"
        assert cmd.base_image_url == "https://img.example/x.png"
        assert cmd.action == Action.GENERATE
        assert cmd.overlay_mode is None

    def test_photograph_in_prompt_section(self):
        cmd = web("[PROMPT]: a photograph of a lighthouse [OVERLAY]: baseify")
        assert cmd.prompt == "a lighthouse"
        assert cmd.overlay_mode == OverlayMode.BASEIFY

    def test_url_with_description_stays_generate(self):
        cmd = web("a cat wearing a hat https://example.com/a.png")
        assert cmd.action == Action.GENERATE
        assert cmd.prompt == "a cat wearing a hat"
        assert cmd.base_image_url == "https://example.com/a.png"
        assert cmd.overlay_mode is None

    def test_add_keyword_to_this(self):
        cmd = web("add higherify to this")
        assert cmd.action == Action.OVERLAY
        assert cmd.overlay_mode == OverlayMode.HIGHERIFY
        assert cmd.use_parent_image is True
        assert cmd.prompt is None

    def test_trailing_keyword(self):
        cmd = web("a cat in sunglasses degenify")
        assert cmd.action == Action.OVERLAY
        assert cmd.overlay_mode == OverlayMode.DEGENIFY
        assert cmd.prompt == "a cat in sunglasses"

    def test_bare_keyword(self):
        cmd = web("lensify")
        assert cmd.action == Action.OVERLAY
        assert cmd.use_parent_image is True
        assert cmd.overlay_mode == OverlayMode.LENSIFY


@pytest.mark.parametrize("channel", ["web", "frame", "telegram", "default"])
def test_web_aliases_behave_alike(channel):
    cmd = parse_command("[PROMPT]: a dog [OVERLAY]: higherify", channel)
    assert cmd.prompt == "a dog"
    assert cmd.overlay_mode == OverlayMode.HIGHERIFY
