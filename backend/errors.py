from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorCode:
    code: str
    message: str


RATE_LIMITED = ErrorCode("rate_limited", "Rate limit exceeded, try again shortly.")
UPSTREAM_ERROR = ErrorCode("upstream_error", "Failed to retrieve games from Lichess.")
BAD_REQUEST = ErrorCode("bad_request", "Request payload is invalid.")


def format_error(code: ErrorCode, *, detail: Optional[str] = None) -> dict:
    return {"code": code.code, "message": code.message, "detail": detail}
