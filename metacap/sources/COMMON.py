# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import re
from typing import Any, Optional, cast
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup
from bs4.element import Tag

from metacap.console import console
from metacap.exceptions import SourceError
from metacap.ratelimit import RateLimiter

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4.1 Safari/605.1.15"
)


class COMMON:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.default_config = cast(dict[str, Any], config.get("DEFAULT", {}))
        self.debug = bool(self.default_config.get("debug", False))

    def source_config(self, source: str) -> dict[str, Any]:
        sources = cast(dict[str, Any], self.config.get("SOURCES", {}))
        return cast(dict[str, Any], sources.get(source, {}) or {})

    def base_url(self, source: str, default: str) -> str:
        return str(self.source_config(source).get("base_url") or default).rstrip("/")

    def build_limiter(self, source: str, interval: float, capacity: int = 1) -> RateLimiter:
        """Limiter sized for one site, overridable per source in config."""
        cfg = self.source_config(source)
        return RateLimiter(
            capacity=int(cfg.get("capacity", capacity)),
            interval=float(cfg.get("interval", interval)),
        )

    def build_session(self) -> httpx.AsyncClient:
        proxy = self.default_config.get("proxy") or None
        timeout = float(self.default_config.get("timeout", 30))
        return httpx.AsyncClient(
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "zh-CN,zh-Hans;q=0.9,ja;q=0.8",
            },
            timeout=timeout,
            proxy=proxy,
            follow_redirects=True,
        )

    async def _get(
        self,
        session: httpx.AsyncClient,
        limiter: RateLimiter,
        source: str,
        url: str,
        params: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        await limiter.acquire()
        if self.debug:
            console.print(f"[cyan]{source}: GET {url} {params or ''}[/cyan]")
        try:
            response = await session.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SourceError(f"HTTP {e.response.status_code} from {url}", source=source) from e
        except httpx.HTTPError as e:
            raise SourceError(f"request to {url} failed: {e}", source=source) from e
        return response

    async def get_text(
        self,
        session: httpx.AsyncClient,
        limiter: RateLimiter,
        source: str,
        url: str,
        params: Optional[dict[str, str]] = None,
    ) -> str:
        response = await self._get(session, limiter, source, url, params)
        return response.text

    async def get_bytes(self, session: httpx.AsyncClient, limiter: RateLimiter, source: str, url: str) -> bytes:
        response = await self._get(session, limiter, source, url)
        return response.content

    async def get_soup(
        self,
        session: httpx.AsyncClient,
        limiter: RateLimiter,
        source: str,
        url: str,
        params: Optional[dict[str, str]] = None,
    ) -> BeautifulSoup:
        text = await self.get_text(session, limiter, source, url, params)
        return BeautifulSoup(text, "html.parser")

    @staticmethod
    def absolute(base_url: str, href: str) -> str:
        # handles "//host/path" as well as "/path"
        return urljoin(f"{base_url}/", href)

    @staticmethod
    def text_of(tag: Optional[Tag]) -> str:
        return tag.get_text(strip=True) if tag is not None else ""

    @staticmethod
    def attr_of(tag: Optional[Tag], name: str) -> str:
        if tag is None:
            return ""
        value = tag.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return str(value or "").strip()

    @staticmethod
    def leading_int(text: str) -> int:
        match = re.search(r"\d+", text)
        return int(match.group()) if match else 0

    @staticmethod
    def leading_float(text: str) -> float:
        match = re.search(r"\d+(?:\.\d+)?", text)
        return float(match.group()) if match else 0.0
