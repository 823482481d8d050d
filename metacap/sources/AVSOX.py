# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from metacap.console import console
from metacap.identity import Identity, Special, Standard
from metacap.record import Record
from metacap.sources.COMMON import COMMON


class AVSOX:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.common = COMMON(config)
        self.source = "AVSOX"
        self.name = "avsox"
        self.base_url = self.common.base_url(self.source, "https://avsox.click")
        self.search_url = f"{self.base_url}/cn/search/"
        self.limiter = self.common.build_limiter(self.source, interval=1)
        self.session = self.common.build_session()

    def supports(self, identity: Identity) -> bool:
        return isinstance(identity, (Standard, Special))

    async def find(self, identity: Identity) -> Record:
        record = Record.for_identity(identity)

        item = await self._search(identity)
        if item is None:
            if self.common.debug:
                console.print(f"[yellow]{self.name}: nothing found for {identity}[/yellow]")
            return record

        frame = item.select_one("div.photo-frame img")
        record.title = self.common.attr_of(frame, "title")
        dates = item.select("div.photo-info date")
        if len(dates) > 1:
            record.premiered = self.common.text_of(dates[1])

        poster_url = self.common.attr_of(frame, "src")
        if poster_url:
            record.poster = await self.common.get_bytes(self.session, self.limiter, self.name, self.common.absolute(self.base_url, poster_url))

        detail_url = self.common.attr_of(item, "href")
        if detail_url:
            fanart_url = await self._parse_detail(self.common.absolute(self.base_url, detail_url), record)
            if fanart_url:
                record.fanart = await self.common.get_bytes(self.session, self.limiter, self.name, self.common.absolute(self.base_url, fanart_url))

        return record

    async def _search(self, identity: Identity) -> Optional[Tag]:
        soup = await self.common.get_soup(self.session, self.limiter, self.name, f"{self.search_url}{identity.name}")
        for item in soup.select("#waterfall div.item > a, #waterfall > div > a"):
            dates = item.select("div.photo-info date")
            # the first <date> holds the release id
            if dates and identity.matches(self.common.text_of(dates[0])):
                return item
        return None

    async def _parse_detail(self, url: str, record: Record) -> str:
        soup: BeautifulSoup = await self.common.get_soup(self.session, self.limiter, self.name, url)

        fanart = soup.select_one("div.screencap a img") or soup.select_one("a.bigImage img")
        fanart_url = self.common.attr_of(fanart, "src")

        for genre in soup.select("div.info span.genre a"):
            text = self.common.text_of(genre)
            if text:
                record.genres.add(text)

        label = ""
        for paragraph in soup.select("div.info p"):
            text = paragraph.get_text(" ", strip=True)
            if not text:
                continue
            if text.endswith(":"):
                label = text.rstrip(":").strip()
                continue
            if ":" in text:
                key, value = text.split(":", 1)
            else:
                key, value = label, text
            key, value = key.strip(), value.strip()

            if key == "制作商":
                record.studio = value
            elif key == "系列":
                record.director = value
            elif key == "长度":
                record.runtime = self.common.leading_int(value)

        return fanart_url

    async def close(self) -> None:
        await self.session.aclose()
