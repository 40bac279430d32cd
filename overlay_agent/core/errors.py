"""
Application-wide error hierarchy.

The command parser itself never raises; these types are used at the HTTP
boundary to turn bad requests into structured JSON responses.
"""

import time
from abc import ABC, abstractmethod
from typing import Any


class OverlayAgentError(Exception, ABC):
    """Abstract base for all typed application errors."""

    @abstractmethod
    def _abstract_guard(self) -> None: ...

    @property
    @abstractmethod
    def is_retryable(self) -> bool: ...

    @property
    @abstractmethod
    def http_status(self) -> int: ...

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper().replace("ERROR", "").strip("_") or type(self).__name__
        self.timestamp = time.time()
        self.request_id = request_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "is_retryable": self.is_retryable,
            "http_status": self.http_status,
            "timestamp": self.timestamp,
            "request_id": self.request_id,
        }


class ValidationError(OverlayAgentError):
    is_retryable: bool = False
    http_status: int = 400

    def _abstract_guard(self) -> None: ...

    def __init__(
        self, message: str, *, code: str = "VALIDATION", field: str | None = None, **kw: Any
    ) -> None:
        super().__init__(message, code=code, **kw)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["field"] = self.field
        return data
