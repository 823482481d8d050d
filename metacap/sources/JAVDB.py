# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any, Optional

from bs4.element import Tag

from metacap.console import console
from metacap.identity import Identity, Standard, default_country
from metacap.record import Record
from metacap.sources.COMMON import COMMON


class JAVDB:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.common = COMMON(config)
        self.source = "JAVDB"
        self.name = "javdb"
        self.base_url = self.common.base_url(self.source, "https://javdb.com")
        self.search_url = f"{self.base_url}/search"
        # javdb bans aggressively, keep it slow
        self.limiter = self.common.build_limiter(self.source, interval=2)
        self.session = self.common.build_session()

    def supports(self, identity: Identity) -> bool:
        return isinstance(identity, Standard) and default_country(identity) == "Japan"

    async def find(self, identity: Identity) -> Record:
        record = Record.for_identity(identity)

        item = await self._search(identity)
        if item is None:
            if self.common.debug:
                console.print(f"[yellow]{self.name}: nothing found for {identity}[/yellow]")
            return record

        link = item.select_one("a")
        record.title = self.common.attr_of(link, "title")
        record.premiered = self.common.text_of(item.select_one("div.meta"))
        score = self.common.text_of(item.select_one("div.score span.value"))
        if score:
            # five star scale
            record.rating = self.common.leading_float(score) * 2

        href = self.common.attr_of(link, "href")
        if href:
            await self._parse_detail(self.common.absolute(self.base_url, href), record)
        return record

    async def _search(self, identity: Identity) -> Optional[Tag]:
        soup = await self.common.get_soup(
            self.session, self.limiter, self.name, self.search_url,
            params={"q": identity.name, "f": "all"},
        )
        for item in soup.select("div.movie-list div.item"):
            code = self.common.text_of(item.select_one("div.video-title strong"))
            if code and identity.matches(code):
                return item
        return None

    async def _parse_detail(self, url: str, record: Record) -> None:
        soup = await self.common.get_soup(self.session, self.limiter, self.name, url)
        for block in soup.select("nav.movie-panel-info div.panel-block"):
            name = self.common.text_of(block.select_one("strong")).rstrip(":：").strip()
            value_tag = block.select_one("span.value") or block.select_one("span")
            if not name or value_tag is None:
                continue
            value = value_tag.get_text("\n", strip=True)

            if name == "時長":
                record.runtime = self.common.leading_int(value)
            elif name == "導演":
                record.director = value.strip()
            elif name == "片商":
                record.studio = value.strip()
            elif name == "類別":
                for genre in value.replace("\n", ",").split(","):
                    if genre.strip():
                        record.genres.add(genre.strip())
            elif name == "演員":
                for line in value.splitlines():
                    actor = line.strip().rstrip("♂♀").strip()
                    if actor:
                        record.actors.add(actor)

    async def close(self) -> None:
        await self.session.aclose()
