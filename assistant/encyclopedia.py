"""Wikipedia REST client for page summaries.

API: https://en.wikipedia.org/api/rest_v1/page/summary/{title}
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

USER_AGENT = "toolchat/0.1 (interactive tool-calling chat CLI)"


class ArticleNotFoundError(Exception):
    """No Wikipedia article exists for the requested topic."""

    def __init__(self, topic: str) -> None:
        super().__init__(f"No Wikipedia article found for '{topic}'.")
        self.topic = topic


class ArticleSummary(BaseModel):
    title: str
    extract: str
    url: str | None = None


class WikipediaClient:
    """Fetches article summaries from one language edition of Wikipedia."""

    def __init__(
        self,
        language: str = "en",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.language = language
        self.base_url = f"https://{language}.wikipedia.org/api/rest_v1"
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def summarize(self, topic: str) -> ArticleSummary:
        """Return the summary for ``topic``.

        Raises ArticleNotFoundError on 404 and httpx.HTTPError for any
        other transport or status failure.
        """
        title = topic.strip().replace(" ", "_")
        resp = self._get_client().get(f"/page/summary/{quote(title, safe='')}")
        if resp.status_code == 404:
            raise ArticleNotFoundError(topic)
        resp.raise_for_status()
        data = resp.json()
        url = ((data.get("content_urls") or {}).get("desktop") or {}).get("page")
        return ArticleSummary(
            title=data.get("title") or topic,
            extract=data.get("extract") or "",
            url=url,
        )


__all__ = ["ArticleNotFoundError", "ArticleSummary", "WikipediaClient"]
