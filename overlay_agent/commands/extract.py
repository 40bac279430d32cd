"""Field extractors shared by every channel policy.

Each extractor reads the instruction and writes what it finds into a
ParseDraft. None of them raise; a miss leaves the draft untouched.
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple

from overlay_agent.commands import patterns as P
from overlay_agent.commands.types import (
    OVERLAY_KEYWORDS,
    Action,
    Controls,
    OverlayMode,
    ParsedCommand,
    TextOverlay,
)
from overlay_agent.core.logging import get_logger

_log = get_logger("commands.extract")


@dataclass
class ParseDraft:
    """Mutable working state for a single parse call."""

    action: Action = Action.GENERATE
    prompt: str | None = None
    overlay_mode: OverlayMode | None = None
    base_image_url: str | None = None
    use_parent_image: bool = False
    controls: dict[str, Any] = field(default_factory=dict)
    text: dict[str, Any] = field(default_factory=dict)

    # An explicit action wins over the "overlay mode implies overlay" rule.
    action_decided: bool = False
    parent_reference: bool = False
    explicit_generation: bool = False

    def set_prompt(self, value: str | None) -> None:
        self.prompt = value.strip() if value and value.strip() else None

    def build(self) -> ParsedCommand:
        return ParsedCommand(
            action=self.action,
            prompt=self.prompt,
            overlay_mode=self.overlay_mode,
            base_image_url=self.base_image_url,
            use_parent_image=self.use_parent_image,
            controls=Controls(**self.controls) if self.controls else None,
            text=TextOverlay(**self.text) if self.text else None,
        )


class Sections(NamedTuple):
    prompt: str | None
    overlay: str | None
    text: str | None

    def any(self) -> bool:
        return bool(self.prompt or self.overlay or self.text)


def _section(pattern, text: str) -> str | None:
    match = pattern.search(text)
    if match:
        return match.group(1).strip() or None
    return None


def has_structured_format(text: str) -> bool:
    return any(pattern.search(text) for pattern in P.STRUCTURED_PATTERNS)


def find_sections(text: str) -> Sections:
    """Split a structured message into prompt/overlay/text sections.

    Bracketed headers win, then bare headers, then the legacy
    WOWOW/CAPTION pair.
    """
    sections = Sections(
        _section(P.PROMPT_SECTION_PATTERN, text),
        _section(P.OVERLAY_SECTION_PATTERN, text),
        _section(P.TEXT_SECTION_PATTERN, text),
    )
    if not sections.any():
        sections = Sections(
            _section(P.PROMPT_ALT_PATTERN, text),
            _section(P.OVERLAY_ALT_PATTERN, text),
            _section(P.TEXT_ALT_PATTERN, text),
        )
    if not sections.any():
        sections = Sections(
            _section(P.WOWOW_PATTERN, text),
            None,
            _section(P.CAPTION_PATTERN, text),
        )
    return sections


def extract_url(text: str, draft: ParseDraft) -> str:
    """Record the first URL and return the text without it."""
    match = P.URL_PATTERN.search(text)
    if not match:
        return text
    if draft.base_image_url is None:
        draft.base_image_url = match.group(0)
        _log.debug("URL found", url=draft.base_image_url[:80])
    return (text[:match.start()] + text[match.end():]).strip()


def _parse_float(raw: str) -> float | None:
    try:
        return float(raw)
    except ValueError:
        return None


def _normalize_alpha(value: float) -> float:
    # 50 means 50%
    return value / 100 if value > 1 else value


def extract_controls(text: str, draft: ParseDraft, *, overwrite_scale: bool = False) -> None:
    for pattern in P.POSITION_PATTERNS:
        match = pattern.search(text)
        if match:
            x, y = _parse_float(match.group(1)), _parse_float(match.group(2))
            if x is not None and y is not None:
                draft.controls["x"] = x
                draft.controls["y"] = y
                break

    if overwrite_scale or "scale" not in draft.controls:
        for pattern in P.SCALE_PATTERNS:
            match = pattern.search(text)
            if match:
                scale = _parse_float(match.group(1))
                if scale is not None:
                    draft.controls["scale"] = scale
                    break

    for pattern in P.COLOR_PATTERNS:
        match = pattern.search(text)
        if match:
            draft.controls["overlay_color"] = match.group(1).lower()
            break

    for pattern in P.OPACITY_PATTERNS:
        match = pattern.search(text)
        if match:
            alpha = _parse_float(match.group(1))
            if alpha is not None:
                draft.controls["overlay_alpha"] = _normalize_alpha(alpha)
                break

    if draft.controls:
        _log.debug("Controls extracted", **draft.controls)


def _first_group(table, text: str) -> str | None:
    for pattern in table:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def extract_text(text: str, draft: ParseDraft) -> None:
    content = _first_group(P.TEXT_PATTERNS, text)
    position = _first_group(P.TEXT_POSITION_PATTERNS, text)
    size = _first_group(P.TEXT_SIZE_PATTERNS, text)
    color = _first_group(P.TEXT_COLOR_PATTERNS, text)
    style = _first_group(P.TEXT_STYLE_PATTERNS, text)
    background = _first_group(P.TEXT_BACKGROUND_PATTERNS, text)

    if content:
        draft.text["content"] = content
    if position:
        draft.text["position"] = position.lower()
    if size:
        draft.text["font_size"] = int(size)
    if color:
        draft.text["color"] = color.lower()
    if style:
        draft.text["style"] = style.lower()
    if background:
        draft.text["background_color"] = background.lower()

    if draft.text:
        _log.debug("Text extracted", **draft.text)


def extract_text_section(section: str, draft: ParseDraft) -> None:
    """Parse "<content>, <position>, size N, color C, style S"."""
    parts = section.split(",")
    content = parts[0].strip()
    if content:
        draft.text["content"] = content

    for raw in parts[1:]:
        part = raw.strip().lower()
        if part in P.TEXT_POSITIONS:
            draft.text["position"] = part
            continue

        match = P.SECTION_SIZE_PATTERN.search(part)
        if match:
            draft.text["font_size"] = int(match.group(1))
            continue

        match = P.SECTION_COLOR_PATTERN.search(part)
        if match:
            draft.text["color"] = match.group(1)
            continue

        match = P.SECTION_STYLE_PATTERN.search(part) or P.SECTION_BARE_STYLE_PATTERN.match(part)
        if match:
            draft.text["style"] = match.group(1)


def find_overlay_mode(text: str, *, substring: bool = False) -> OverlayMode | None:
    """Look for "apply/use/with <keyword>"; optionally any keyword substring."""
    for pattern in P.OVERLAY_PATTERNS:
        match = pattern.search(text)
        if match:
            return OverlayMode(match.group(1).lower())

    if substring:
        lowered = text.lower()
        for keyword in OVERLAY_KEYWORDS:
            if keyword in lowered:
                return OverlayMode(keyword)
    return None


def leading_keyword(text: str) -> OverlayMode | None:
    match = P.LEADING_KEYWORD_PATTERN.match(text)
    return OverlayMode(match.group(1).lower()) if match else None


def standalone_keyword(text: str) -> OverlayMode | None:
    match = P.KEYWORD_WORD_PATTERN.search(text)
    return OverlayMode(match.group(1).lower()) if match else None


def is_just_overlay_keyword(text: str) -> bool:
    lowered = text.strip().lower()
    for keyword in OVERLAY_KEYWORDS:
        if lowered in (keyword, f"{keyword}.", f"{keyword}!", f"{keyword} this", f"{keyword} it"):
            return True
    return False


def has_parent_reference(text: str) -> bool:
    lowered = text.strip().lower()
    if any(pattern.search(lowered) for pattern in P.PARENT_IMAGE_PATTERNS):
        return True
    return is_just_overlay_keyword(text)


def is_explicit_generation(text: str) -> bool:
    return any(pattern.search(text) for pattern in P.EXPLICIT_GENERATION_PATTERNS)


def split_photograph(description: str, draft: ParseDraft) -> None:
    """Handle "<desc>. scale to N" from the photograph template."""
    match = P.PHOTOGRAPH_SCALE_PATTERN.match(description)
    if match:
        draft.set_prompt(match.group(1))
        scale = _parse_float(match.group(2))
        if scale is not None:
            draft.controls["scale"] = scale
            _log.debug("Scale from photo description", scale=scale)
    else:
        draft.set_prompt(description.strip().rstrip("."))
