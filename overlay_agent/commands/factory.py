"""Channel to parser mapping with a lazily built, per-channel cache."""

from overlay_agent.commands.parser import CommandParser
from overlay_agent.commands.policies import CHAT_POLICY, WEB_POLICY, ChannelPolicy
from overlay_agent.commands.types import Channel, ParsedCommand
from overlay_agent.config import DEFAULT_CHANNEL
from overlay_agent.core.logging import get_logger
from overlay_agent.core.utils import LazyMap

_log = get_logger("commands.factory")

# frame and telegram share the web behaviour for now.
CHANNEL_POLICIES: dict[Channel, ChannelPolicy] = {
    Channel.WEB: WEB_POLICY,
    Channel.FARCASTER: CHAT_POLICY,
    Channel.FRAME: WEB_POLICY,
    Channel.TELEGRAM: WEB_POLICY,
    Channel.DEFAULT: WEB_POLICY,
}


def _build_parser(channel: Channel) -> CommandParser:
    parser = CommandParser(CHANNEL_POLICIES[channel])
    _log.debug("Parser built", channel=channel, parser=parser.policy.name)
    return parser


_parsers: LazyMap[Channel, CommandParser] = LazyMap(_build_parser)


def is_known_channel(channel: str | Channel | None) -> bool:
    if channel is None or isinstance(channel, Channel):
        return True
    return channel.strip().lower() in Channel._value2member_map_


def resolve_channel(channel: str | Channel | None) -> Channel:
    """Map a caller-supplied hint to a Channel, falling back to default."""
    if isinstance(channel, Channel):
        return channel
    if channel is None:
        channel = DEFAULT_CHANNEL

    key = channel.strip().lower()
    try:
        return Channel(key)
    except ValueError:
        _log.warning("Unknown channel, using default", channel=channel)
        return Channel.DEFAULT


def get_parser(channel: str | Channel | None = None) -> CommandParser:
    return _parsers.get(resolve_channel(channel))


def reset_parsers() -> None:
    _parsers.reset()


def parse_command(instruction: str | None, channel: str | Channel | None = None) -> ParsedCommand:
    """Parse an instruction with the parser for ``channel``.

    Args:
        instruction: Raw user text
        channel: web, farcaster, frame, telegram or default; None uses
            the configured DEFAULT_CHANNEL

    Returns:
        ParsedCommand
    """
    channel = resolve_channel(channel)
    _log.debug("Parse request", channel=channel, chars=len(instruction or ""))
    return get_parser(channel).parse(instruction)


def warmed_channels() -> list[str]:
    """Channels whose parser has already been built."""
    return [channel.value for channel in Channel if channel in _parsers]
