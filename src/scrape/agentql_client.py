"""AgentQL ``query-data`` client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .query import PRODUCT_QUERY, QUERY_PARAMS

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.agentql.com/v1/query-data"


class UpstreamError(Exception):
    """The extraction API answered, but not with usable data for *url*."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class AgentQLClient:
    """Sends the product query for one URL at a time to AgentQL."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._client = httpx.AsyncClient(
            headers={"X-API-Key": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def query_data(self, url: str) -> dict[str, Any]:
        """Return the ``data`` object AgentQL extracted from *url*.

        Raises :class:`UpstreamError` on a non-2xx answer or when ``data`` is
        missing, null, false, zero or empty string. Any other non-object ``data``
        comes back as ``{}``. Transport errors propagate as ``httpx.TransportError``.
        """
        payload = {"query": PRODUCT_QUERY, "url": url, "params": QUERY_PARAMS}
        resp = await self._client.post(self._api_url, json=payload)

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.is_success:
            raise UpstreamError(url, _error_message(body), status_code=resp.status_code)
        if not isinstance(body, dict):
            raise UpstreamError(url, "response body is not a JSON object", resp.status_code)

        data = body.get("data")
        if _is_empty(data):
            raise UpstreamError(url, _error_message(body), status_code=resp.status_code)
        if not isinstance(data, dict):
            # an unusable but present payload still counts as a successful call
            logger.warning(
                "agentql data is not an object",
                extra={"url": url, "shape": type(data).__name__},
            )
            data = {}

        logger.debug("agentql response received", extra={"url": url, "status_code": resp.status_code})
        return data

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(body: Any) -> str:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return "Unknown error"


def _is_empty(value: Any) -> bool:
    """Only null, false, zero and the empty string mean "no data"; ``{}`` and ``[]`` do not."""
    if value is None or value == "":
        return True
    if isinstance(value, (bool, int, float)):
        return not value
    return False
