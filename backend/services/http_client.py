"""
Single point of contact with the network for every gateway call.

One request per call, no retry. Every failure is logged and turned into
``None`` so callers never have to catch transport errors.
"""
from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import urljoin

import requests

from settings import settings

logger = logging.getLogger(__name__)
_session = requests.Session()


def _resolve_url(url: str, base_url: Optional[str]) -> str:
    if url.startswith("http://") or url.startswith("https://"):
        return url
    base = (base_url or settings.PLACES_API_BASE_URL).rstrip("/") + "/"
    return urljoin(base, url.lstrip("/"))


def fetch_json(
    url: str,
    method: str = "GET",
    *,
    params: Optional[dict[str, Any]] = None,
    base_url: Optional[str] = None,
) -> Any:
    """Perform one request and return the decoded JSON body.

    Returns an empty list for an empty URL (no request is made) and None on
    non-2xx responses, network errors and undecodable bodies.
    """
    if not url:
        return []
    method = (method or "GET").upper()

    try:
        full_url = _resolve_url(url, base_url)
        resp = _session.request(
            method,
            full_url,
            params=params,
            timeout=settings.HTTP_TIMEOUT_SEC,
        )
    except Exception as exc:
        logger.error("HTTP %s %s failed: %s", method, url, exc)
        return None

    if not resp.ok:
        logger.error("HTTP %s %s returned status %s", method, url, resp.status_code)
        return None

    try:
        return resp.json()
    except Exception as exc:
        logger.error("HTTP %s %s JSON decode error: %s", method, url, exc)
        return None
