from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for HTTP adapter failures (weather, geocoding)."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the upstream API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, hint=hint, payload=payload, context=context)


class ApiServerError(ApiError):
    """HTTP 5xx from the upstream API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


class ApiPayloadError(ApiError):
    """A 2xx response whose body did not have the expected shape."""


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except ValueError:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def extract_error_hint(payload: Any) -> Optional[str]:
    """Open-Meteo reports failures as ``{"error": true, "reason": "..."}``."""
    if isinstance(payload, dict):
        for key in ("reason", "detail", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()[:200]
    if isinstance(payload, str):
        return payload.strip()[:200] or None
    return None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = extract_error_hint(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def raise_for_status(resp: Any, ctx: str) -> None:
    """Translate non-2xx responses into typed ``ApiError`` subclasses."""
    status = int(getattr(resp, "status_code", 0) or 0)
    if 200 <= status < 300:
        return
    payload = parse_error_payload(resp)
    message = build_error_message(ctx, status, payload)
    if 400 <= status < 500:
        raise ApiClientError(
            message, status=status, hint=extract_error_hint(payload), payload=payload, context=ctx
        )
    raise ApiServerError(message, status=status, payload=payload, context=ctx)


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiPayloadError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "extract_error_hint",
    "parse_error_payload",
    "raise_for_status",
]
