# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any

from metacap.console import console
from metacap.exceptions import SourceError
from metacap.identity import Identity, Special, Standard
from metacap.record import Record
from metacap.sources.COMMON import COMMON


class SUBTITLECAT:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.common = COMMON(config)
        self.source = "SUBTITLECAT"
        self.name = "subtitlecat"
        self.base_url = self.common.base_url(self.source, "https://www.subtitlecat.com")
        self.search_url = f"{self.base_url}/index.php"
        self.language = str(self.common.source_config(self.source).get("language", "zh-CN"))
        self.limiter = self.common.build_limiter(self.source, interval=1)
        self.session = self.common.build_session()

    def supports(self, identity: Identity) -> bool:
        return isinstance(identity, (Standard, Special))

    async def find(self, identity: Identity) -> Record:
        record = Record.for_identity(identity)

        soup = await self.common.get_soup(self.session, self.limiter, self.name, self.search_url, params={"search": identity.name})
        detail_url = ""
        for link in soup.select("table tbody tr td:nth-of-type(1) > a"):
            if identity.matches(self.common.text_of(link)):
                detail_url = self.common.attr_of(link, "href")
                break
        if not detail_url:
            if self.common.debug:
                console.print(f"[yellow]{self.name}: no subtitle for {identity}[/yellow]")
            return record

        detail = await self.common.get_soup(self.session, self.limiter, self.name, self.common.absolute(self.base_url, detail_url))
        download_url = self.common.attr_of(detail.select_one(f"#download_{self.language}"), "href")
        if not download_url:
            if self.common.debug:
                console.print(f"[yellow]{self.name}: no {self.language} subtitle for {identity}[/yellow]")
            return record

        subtitle = await self.common.get_text(self.session, self.limiter, self.name, self.common.absolute(self.base_url, download_url))
        if "html" in subtitle and "404" in subtitle:
            raise SourceError("subtitle download returned a 404 page", source=self.name)
        record.subtitle = subtitle.encode("utf-8")
        return record

    async def close(self) -> None:
        await self.session.aclose()
