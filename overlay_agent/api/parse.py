from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from overlay_agent.commands import parse_command, resolve_parent_image
from overlay_agent.commands.factory import is_known_channel
from overlay_agent.core.errors import ValidationError
from overlay_agent.core.logging import get_logger

_log = get_logger("api.parse")

router = APIRouter(tags=["Agent"])


class ParseRequest(BaseModel):
    command: Optional[str] = None
    channel: Optional[str] = None  # web | farcaster | frame | telegram | default
    parentImageUrl: Optional[str] = None


@router.post("/api/agent/parse")
def parse(request: ParseRequest):
    """Parse an instruction and return the command in wire shape."""
    if not request.command or not request.command.strip():
        raise ValidationError("command is required", field="command")
    if not is_known_channel(request.channel):
        raise ValidationError(f"unknown channel: {request.channel}", field="channel")

    command = parse_command(request.command, request.channel)
    command = resolve_parent_image(command, request.parentImageUrl)

    _log.info(
        "API parse",
        channel=request.channel or "default",
        action=command.action.value,
        parent=bool(request.parentImageUrl),
    )
    return command.to_dict()
