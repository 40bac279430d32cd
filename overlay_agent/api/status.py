from fastapi import APIRouter

from overlay_agent.commands import get_parser
from overlay_agent.commands.factory import warmed_channels
from overlay_agent.config import APP_VERSION
from overlay_agent.core.logging import get_logger

_log = get_logger("api.status")

router = APIRouter(tags=["Status"])


@router.get("/health")
def health_check():
    return {
        "status": "ok",
        "version": APP_VERSION,
        "parsers": warmed_channels(),
    }


@router.get("/health/ready")
def readiness():
    parser = get_parser()
    _log.debug("Readiness check", parser=parser.policy.name)
    return {"status": "ready"}
