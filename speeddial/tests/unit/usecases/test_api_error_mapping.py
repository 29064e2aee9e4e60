from __future__ import annotations

from speeddial.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiPayloadError,
    ApiServerError,
    ApiTimeoutError,
)
from speeddial.domain.errors import ValidationError
from speeddial.usecases.error_mapping import map_api_error


def test_timeout_maps_to_request_timeout() -> None:
    err = map_api_error(ApiTimeoutError("t"), default_code="X")

    assert err.code == "REQUEST_TIMEOUT"
    assert err.message == "Request timed out. Check connection."


def test_client_error_includes_status_and_hint() -> None:
    err = map_api_error(ApiClientError("ctx", status=400, hint="Latitude out of range"), default_code="X")

    assert err.code == "REQUEST_FAILED"
    assert err.message == "Request failed (HTTP 400): Latitude out of range"


def test_client_error_hint_from_payload() -> None:
    exc = ApiClientError("ctx", status=404, payload={"reason": "No such place"})

    assert map_api_error(exc, default_code="X").message == "Request failed (HTTP 404): No such place"


def test_client_error_without_hint() -> None:
    assert map_api_error(ApiClientError("ctx", status=429), default_code="X").message == "Request failed (HTTP 429)."


def test_server_and_payload_errors() -> None:
    assert map_api_error(ApiServerError("ctx", status=500), default_code="X").code == "SERVER_ERROR"
    assert map_api_error(ApiPayloadError("bad"), default_code="X").code == "BAD_RESPONSE"
    assert map_api_error(ApiError("plain"), default_code="X").message == "plain"


def test_use_case_errors_pass_through() -> None:
    original = ValidationError("nope")

    assert map_api_error(original, default_code="X") is original


def test_unknown_errors_use_defaults() -> None:
    err = map_api_error(RuntimeError(""), default_code="WEATHER_FAILED", default_message="Weather unavailable.")

    assert (err.code, err.message) == ("WEATHER_FAILED", "Weather unavailable.")
    assert map_api_error(KeyError("x"), default_code="Y").code == "Y"
