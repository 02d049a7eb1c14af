from __future__ import annotations

import logging
from typing import Any

import httpx

from device_usage.core.errors import UpstreamFaultError
from device_usage.models.external import Post, PostsSample

logger = logging.getLogger(__name__)


class PostsClient:
    def __init__(
        self,
        *,
        user_agent: str,
        timeout_seconds: float,
        url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_sample(self, *, limit: int) -> PostsSample:
        try:
            resp = await self._client.get(self._url)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Posts provider returned an error",
                extra={"url": self._url, "status_code": e.response.status_code},
            )
            raise UpstreamFaultError(
                f"Failed to fetch external posts: HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "Posts provider unreachable",
                extra={"url": self._url, "reason": type(e).__name__},
            )
            raise UpstreamFaultError(f"Failed to fetch external posts: {e}") from e

        posts = self._extract_posts(payload)
        return PostsSample(count=len(posts), sample=[_to_post(p) for p in posts[:limit]])

    @staticmethod
    def _extract_posts(payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, list):
            raise UpstreamFaultError("Unexpected posts response shape")
        if not all(isinstance(p, dict) for p in payload):
            raise UpstreamFaultError("Unexpected post entry shape")
        return payload


def _to_post(raw: dict[str, Any]) -> Post:
    try:
        return Post(id=int(raw["id"]), title=str(raw["title"]))
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamFaultError("Unexpected post entry shape") from e
