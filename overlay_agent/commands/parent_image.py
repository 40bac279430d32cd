"""Apply a reply-context ("parent") image to an already parsed command."""

from dataclasses import replace

from overlay_agent.commands.types import Action, OverlayMode, ParsedCommand
from overlay_agent.core.logging import get_logger

_log = get_logger("commands.parent_image")

DESCRIPTIVE_PROMPT_CHARS = 10
PARENT_DEFAULT_OVERLAY = OverlayMode.DEGENIFY


def resolve_parent_image(command: ParsedCommand, parent_image_url: str | None) -> ParsedCommand:
    """Decide whether the parent image becomes the base image.

    A parser decision to use the parent image, or to generate, is kept.
    Otherwise a short or missing prompt means the instruction targets the
    parent image.

    Args:
        command: Parser output
        parent_image_url: URL of the image being replied to, if any

    Returns:
        A new ParsedCommand; ``command`` is not modified
    """
    if not parent_image_url:
        return command

    _log.debug("Parent image supplied", url=parent_image_url[:80])
    resolved = replace(command, base_image_url=parent_image_url)

    if resolved.use_parent_image or resolved.action == Action.GENERATE:
        return resolved

    descriptive = bool(resolved.prompt) and len(resolved.prompt) > DESCRIPTIVE_PROMPT_CHARS

    if resolved.overlay_mode is not None:
        if descriptive:
            return resolved
        _log.info("Applying overlay to parent image", overlay_mode=resolved.overlay_mode)
        return replace(resolved, use_parent_image=True, action=Action.OVERLAY)

    if resolved.text is not None:
        return replace(resolved, action=Action.ADJUST)

    _log.info("Parent image without mode", overlay_mode=PARENT_DEFAULT_OVERLAY)
    return replace(
        resolved,
        overlay_mode=PARENT_DEFAULT_OVERLAY,
        use_parent_image=True,
        action=Action.OVERLAY,
    )
