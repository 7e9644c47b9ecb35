"""JSON-over-HTTP client shared by every upstream fetcher.

No retries: a failed request surfaces immediately and the caller decides
whether to re-issue it.
"""

import logging
from typing import Any

import httpx

from roadwx.ingest.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "roadwx/0.1.0"


class HttpClient:
    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises UpstreamError on transport failure, non-2xx status or a body
        that is not JSON.
        """
        try:
            resp = self._client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("Request to %s failed: %s", url, e)
            raise UpstreamError(f"Request failed: {e}", url=url) from e

        if not resp.is_success:
            logger.error("%s returned %d", url, resp.status_code)
            raise UpstreamError(
                f"Request failed with status {resp.status_code}",
                status_code=resp.status_code,
                url=url,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error("Invalid JSON from %s", url)
            raise UpstreamError("Invalid JSON in response", url=url) from e
