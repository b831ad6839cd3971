"""Failure classification for provider I/O.

HTTP providers turn transport errors, bad statuses and undecodable bodies into
a ``ProviderError`` tagged with an ``ErrorCode``, log it, and hand ``None`` to
their caller. The format resolver only ever sees data or ``None``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ErrorCode(str, Enum):
    AUTH = "auth"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


@dataclass
class ProviderError(Exception):
    code: ErrorCode
    message: str
    provider: str
    path: Optional[str] = None
    status: Optional[int] = None
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.provider}:{self.path or '-'} {self.code.value}: {self.message}"


class UnknownProviderError(Exception):
    """Raised for provider ids that are not registered or fail to construct."""


_STATUS_CODES = {
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    429: ErrorCode.RATE_LIMIT,
    504: ErrorCode.TIMEOUT,
}

# First matching rule wins; every keyword of a rule must appear in the message
_MESSAGE_RULES: Tuple[Tuple[Tuple[str, ...], ErrorCode], ...] = (
    (("rate", "limit"), ErrorCode.RATE_LIMIT),
    (("timeout",), ErrorCode.TIMEOUT),
    (("timed out",), ErrorCode.TIMEOUT),
    (("unauthorized",), ErrorCode.AUTH),
    (("forbidden",), ErrorCode.AUTH),
    (("auth",), ErrorCode.AUTH),
    (("not found",), ErrorCode.NOT_FOUND),
    (("not supported",), ErrorCode.UNSUPPORTED),
    (("unsupported",), ErrorCode.UNSUPPORTED),
    (("json",), ErrorCode.VALIDATION),
    (("decode",), ErrorCode.VALIDATION),
    (("connect",), ErrorCode.TRANSIENT),
    (("reset",), ErrorCode.TRANSIENT),
)


def classify_status(status: int) -> ErrorCode:
    if status in _STATUS_CODES:
        return _STATUS_CODES[status]
    if status >= 500:
        return ErrorCode.TRANSIENT
    if status >= 400:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


def classify_exception(exc: Exception) -> ErrorCode:
    message = str(exc).lower()
    for keywords, code in _MESSAGE_RULES:
        if all(word in message for word in keywords):
            return code
    return ErrorCode.UNKNOWN


__all__ = [
    "ErrorCode",
    "ProviderError",
    "UnknownProviderError",
    "classify_exception",
    "classify_status",
]
