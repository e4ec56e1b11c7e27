"""
Shared HTTP client for the Walkalytics API.

Provides a pre-configured ``requests.Session`` with a default timeout and a
Walkalytics User-Agent.  Every query is issued exactly once: the mounted
adapter performs no retries, so a failed call surfaces to the caller
immediately.

Usage::

    from walkalytics.services.http import session

    resp = session.get("https://api.walkalytics.com/v1/pubtrans/ch/nearby", params={...})
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from walkalytics import __version__

#: No retries; read errors are never replayed.
DEFAULT_RETRY = Retry(
    total=0,
    read=False,
    raise_on_status=False,  # status handling lives in walkalytics.validation
)

DEFAULT_TIMEOUT = 30  # seconds

#: Header carrying the Walkalytics subscription key.
SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = f"walkalytics/{__version__}"

    # Inject a default timeout so callers don't need to pass ``timeout=``.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


def auth_headers(key: str) -> dict[str, str]:
    """Headers that authenticate a single request."""
    return {SUBSCRIPTION_KEY_HEADER: key}


#: Module-level session, import and use directly.
session: requests.Session = create_session()
