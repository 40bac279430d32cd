"""Tests for ParsedCommand and its records."""

from dataclasses import FrozenInstanceError

import pytest

from overlay_agent.commands.types import (
    OVERLAY_KEYWORDS,
    Action,
    Controls,
    OverlayMode,
    ParsedCommand,
    TextOverlay,
)


class TestEnums:
    def test_twelve_overlay_modes_in_order(self):
        assert len(OVERLAY_KEYWORDS) == 12
        assert OVERLAY_KEYWORDS[0] == "higherify"
        assert OVERLAY_KEYWORDS[-1] == "ghiblify"

    def test_actions(self):
        assert {a.value for a in Action} == {"generate", "overlay", "adjust", "download"}


class TestToDict:
    def test_minimal(self):
        assert ParsedCommand().to_dict() == {"action": "generate", "useParentImage": False}

    def test_full_shape_is_camel_case(self):
        cmd = ParsedCommand(
            action=Action.OVERLAY,
            prompt="a dog",
            overlay_mode=OverlayMode.HIGHERIFY,
            base_image_url="https://img.example/a.png",
            use_parent_image=True,
            controls=Controls(scale=1.5, overlay_color="red", overlay_alpha=0.5),
            text=TextOverlay(content="Woof", font_size=40, background_color="black"),
        )
        assert cmd.to_dict() == {
            "action": "overlay",
            "prompt": "a dog",
            "overlayMode": "higherify",
            "baseImageUrl": "https://img.example/a.png",
            "useParentImage": True,
            "controls": {"scale": 1.5, "overlayColor": "red", "overlayAlpha": 0.5},
            "text": {"content": "Woof", "fontSize": 40, "backgroundColor": "black"},
        }


class TestRecords:
    def test_is_empty(self):
        assert Controls().is_empty()
        assert not Controls(x=0.0, y=0.0).is_empty()
        assert TextOverlay().is_empty()

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ParsedCommand().action = Action.ADJUST
