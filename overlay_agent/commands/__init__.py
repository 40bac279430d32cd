"""Natural-language command parsing for the overlay generator.

Usage:
    from overlay_agent.commands import parse_command

    cmd = parse_command("higherify", channel="farcaster")
    cmd.to_dict()
"""

from .factory import get_parser, parse_command, reset_parsers, resolve_channel
from .parent_image import resolve_parent_image
from .parser import CommandParser
from .policies import BASE_POLICY, CHAT_POLICY, WEB_POLICY, ChannelPolicy
from .types import (
    OVERLAY_KEYWORDS,
    Action,
    Channel,
    Controls,
    OverlayMode,
    ParsedCommand,
    TextOverlay,
)

__all__ = [
    "parse_command",
    "get_parser",
    "reset_parsers",
    "resolve_channel",
    "resolve_parent_image",
    "CommandParser",
    "ChannelPolicy",
    "BASE_POLICY",
    "WEB_POLICY",
    "CHAT_POLICY",
    "OVERLAY_KEYWORDS",
    "Action",
    "Channel",
    "Controls",
    "OverlayMode",
    "ParsedCommand",
    "TextOverlay",
]
