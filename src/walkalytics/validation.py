"""Response checks run before any payload is touched."""

from __future__ import annotations

from typing import Any

import requests

from walkalytics.exceptions import (
    MalformedPayload,
    MissingRequiredField,
    UnexpectedStatus,
    WrongEndpoint,
)

SUCCESS = 200


def request_url(response: requests.Response) -> str:
    """URL of the request that produced ``response``."""
    if response.request is not None and response.request.url:
        return response.request.url
    return response.url or ""


def check_response(response: requests.Response, endpoint: str) -> None:
    """Ensure ``response`` is a successful answer from ``endpoint``.

    Args:
        response: Response returned by one of the request builders.
        endpoint: Tag the request URL must contain (``"isochrone"``, ``"pubtrans"``).

    Raises:
        UnexpectedStatus: If the status code is not 200.
        WrongEndpoint: If the request URL does not contain ``endpoint``.
    """
    url = request_url(response)
    if response.status_code != SUCCESS:
        raise UnexpectedStatus(response.status_code, url=url)
    if endpoint not in url:
        raise WrongEndpoint(
            f"object is no response object from a walkalytics {endpoint} API call"
        )


def response_json(response: requests.Response, endpoint: str) -> Any:
    """Validate ``response`` and return its decoded JSON body."""
    check_response(response, endpoint)
    try:
        return response.json()
    except ValueError as exc:
        raise MalformedPayload(f"response body is not JSON: {exc}") from exc


def require_query(x: float | None, y: float | None, key: str | None) -> str:
    """Fail fast, before any network call, if x, y or the key is absent.

    Returns:
        The subscription key.
    """
    if x is None:
        raise MissingRequiredField("x of starting point is missing.")
    if y is None:
        raise MissingRequiredField("y of starting point is missing.")
    if not key:
        raise MissingRequiredField("key is missing.")
    return key
