"""A small HTTP client for JSON APIs."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import requests

logger = logging.getLogger(__name__)

SENSITIVE_PARAMS = ("secretPhrase", "messageToEncrypt")


class ApiError(Exception):
    """Raised when a request fails or its answer cannot be decoded."""


def _quote(body: bytes) -> str:
    return json.dumps(body.decode("utf-8", errors="replace"), ensure_ascii=False)


class JsonApiClient:
    """Sends requests to one host, passing parameters in the query string."""

    def __init__(self, api_host: str, static_headers: Mapping[str, str] | None = None):
        self.api_host = api_host
        self.static_headers = dict(static_headers or {})
        self._session = requests.Session()

    def request(
        self,
        http_method: str,
        method: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Perform a request and return decoded JSON, or raw bytes for JPEG answers."""
        params = dict(params or {})
        url = self.api_host + method
        loggable = {key: value for key, value in params.items() if key not in SENSITIVE_PARAMS}
        logger.debug("Request %s %s with params: %s", http_method, url, loggable)

        request_headers = {"Accepts": "application/json", **self.static_headers, **(headers or {})}
        try:
            response = self._session.request(
                http_method, url, params=params, headers=request_headers
            )
        except requests.RequestException as exc:
            raise ApiError(f"error perform {http_method} {url}: {exc}") from exc

        body = response.content
        if response.status_code != 200:
            raise ApiError(
                f"error StatusCode {response.status_code} for {url}. Body: {_quote(body)}"
            )
        if response.headers.get("Content-Type") == "image/jpeg":
            return body
        try:
            return json.loads(body)
        except ValueError as exc:
            raise ApiError(
                f"couldn't unmarshal body of {url}: {exc}. Body: {_quote(body)}"
            ) from exc