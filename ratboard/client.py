"""
HTTP transport used by the Python board client.

Thin wrapper over a requests.Session: every call returns
``(status_code, json_body)`` and transport failures become ApiUnavailable.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class ApiUnavailable(Exception):
    """The API could not be reached (connection refused, DNS, reset...)."""


class HttpApi:
    def __init__(self, base_url: str = "http://127.0.0.1:5000", session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict | None = None,
    ) -> tuple[int, dict]:
        try:
            resp = self.session.request(method, self.base_url + path, json=json, params=params)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiUnavailable(str(e)) from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        return resp.status_code, data if isinstance(data, dict) else {}
