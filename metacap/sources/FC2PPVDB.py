# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any

from metacap.console import console
from metacap.identity import Identity, Special
from metacap.record import Record
from metacap.sources.COMMON import COMMON


class FC2PPVDB:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.common = COMMON(config)
        self.source = "FC2PPVDB"
        self.name = "fc2ppvdb"
        self.base_url = self.common.base_url(self.source, "https://fc2ppvdb.com")
        self.search_url = f"{self.base_url}/search"
        self.limiter = self.common.build_limiter(self.source, interval=1)
        self.session = self.common.build_session()

    def supports(self, identity: Identity) -> bool:
        return isinstance(identity, Special)

    async def find(self, identity: Identity) -> Record:
        record = Record.for_identity(identity)
        # the search redirects straight to the article page when the code exists
        soup = await self.common.get_soup(
            self.session, self.limiter, self.name, self.search_url,
            params={"stype": "title", "keyword": identity.code},
        )

        heading = soup.select_one("section h2")
        if heading is None or heading.parent is None:
            if self.common.debug:
                console.print(f"[yellow]{self.name}: nothing found for {identity}[/yellow]")
            return record

        details: dict[str, str] = {}
        for item in heading.parent.find_all("div", recursive=False):
            text = item.get_text("\n", strip=True)
            if "：" not in text:
                continue
            key, value = text.split("：", 1)
            details[key.strip()] = value.strip()

        if not identity.matches(f"FC2-PPV-{details.get('ID', '')}"):
            if self.common.debug:
                console.print(f"[yellow]{self.name}: result {details.get('ID')!r} is not {identity}[/yellow]")
            return record

        record.title = self.common.text_of(heading.select_one("a") or heading)
        percentage = self.common.text_of(soup.select_one("#percentage"))
        if percentage:
            # percent liked -> ten point scale
            record.rating = self.common.leading_int(percentage) / 10

        for key, value in details.items():
            if key == "販売者":
                record.director = value
            elif key == "女優":
                for actor in value.splitlines():
                    if actor.strip():
                        record.actors.add(actor.strip())
            elif key == "販売日":
                record.premiered = value
            elif key == "収録時間":
                record.runtime = self._minutes(value)
            elif key == "タグ":
                for tag in value.splitlines():
                    if tag.strip():
                        record.genres.add(tag.strip())

        image = soup.select_one("section a > img")
        image_url = self.common.attr_of(image, "src")
        if image_url:
            cover = await self.common.get_bytes(self.session, self.limiter, self.name, self.common.absolute(self.base_url, image_url))
            record.poster = cover
            record.fanart = cover

        return record

    @staticmethod
    def _minutes(value: str) -> int:
        """``HH:MM:SS`` or ``MM:SS`` to whole minutes."""
        parts = [p.strip() for p in value.split(":")]
        if not all(p.isdigit() for p in parts) or len(parts) < 2:
            return 0
        numbers = [int(p) for p in parts]
        if len(numbers) == 2:
            return numbers[0]
        return numbers[-3] * 60 + numbers[-2]

    async def close(self) -> None:
        await self.session.aclose()
