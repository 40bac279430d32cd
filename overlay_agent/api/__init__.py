from .parse import router as parse_router
from .status import router as status_router

__all__ = [

    'parse_router',
    'status_router',
]
