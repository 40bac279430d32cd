"""Value types produced by the command parser."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Action(str, Enum):
    GENERATE = "generate"
    OVERLAY = "overlay"
    ADJUST = "adjust"
    DOWNLOAD = "download"


class OverlayMode(str, Enum):
    HIGHERIFY = "higherify"
    DEGENIFY = "degenify"
    SCROLLIFY = "scrollify"
    LENSIFY = "lensify"
    HIGHERISE = "higherise"
    DICKBUTTIFY = "dickbuttify"
    NIKEFY = "nikefy"
    NOUNIFY = "nounify"
    BASEIFY = "baseify"
    CLANKERIFY = "clankerify"
    MANTLEIFY = "mantleify"
    GHIBLIFY = "ghiblify"


# Declaration order is the lookup order for every keyword scan.
OVERLAY_KEYWORDS: tuple[str, ...] = tuple(mode.value for mode in OverlayMode)


class Channel(str, Enum):
    WEB = "web"
    FARCASTER = "farcaster"
    FRAME = "frame"
    TELEGRAM = "telegram"
    DEFAULT = "default"


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class Controls:
    """Compositing adjustments. Only keys found in the instruction are set."""

    scale: float | None = None
    x: float | None = None
    y: float | None = None
    overlay_color: str | None = None
    overlay_alpha: float | None = None

    def is_empty(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "scale": self.scale,
            "x": self.x,
            "y": self.y,
            "overlayColor": self.overlay_color,
            "overlayAlpha": self.overlay_alpha,
        })


@dataclass(frozen=True)
class TextOverlay:
    """Caption parameters. Only keys found in the instruction are set."""

    content: str | None = None
    position: str | None = None
    font_size: int | None = None
    color: str | None = None
    style: str | None = None
    background_color: str | None = None

    def is_empty(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> dict[str, Any]:
        return _drop_none({
            "content": self.content,
            "position": self.position,
            "fontSize": self.font_size,
            "color": self.color,
            "style": self.style,
            "backgroundColor": self.background_color,
        })


@dataclass(frozen=True)
class ParsedCommand:
    """Structured result of parsing one instruction.

    Attributes:
        action: What the caller should do; always set
        prompt: Cleaned generation prompt, or None
        overlay_mode: Overlay style, always a member of OverlayMode
        base_image_url: URL found in the instruction
        use_parent_image: Apply to the image being replied to
        controls: Scale/position/colour/opacity adjustments
        text: Caption parameters
    """

    action: Action = Action.GENERATE
    prompt: str | None = None
    overlay_mode: OverlayMode | None = None
    base_image_url: str | None = None
    use_parent_image: bool = False
    controls: Controls | None = None
    text: TextOverlay | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape consumed by the renderer."""
        data: dict[str, Any] = {
            "action": self.action.value,
            "useParentImage": self.use_parent_image,
        }
        if self.prompt is not None:
            data["prompt"] = self.prompt
        if self.overlay_mode is not None:
            data["overlayMode"] = self.overlay_mode.value
        if self.base_image_url is not None:
            data["baseImageUrl"] = self.base_image_url
        if self.controls is not None:
            data["controls"] = self.controls.to_dict()
        if self.text is not None:
            data["text"] = self.text.to_dict()
        return data
