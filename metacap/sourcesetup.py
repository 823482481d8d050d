# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any, Optional, Union, cast

from metacap.console import console
from metacap.sources.AVSOX import AVSOX
from metacap.sources.base import Source
from metacap.sources.FC2PPVDB import FC2PPVDB
from metacap.sources.JAVDB import JAVDB
from metacap.sources.SUBTITLECAT import SUBTITLECAT


class SOURCE_SETUP:
    def __init__(self, config: dict[str, Any]):
        self.config: dict[str, Any] = config

    def _create_source_instance(self, source: str) -> Optional[Source]:
        source_class = source_class_map.get(source.upper())
        if source_class is None:
            return None
        return cast(Source, source_class(self.config))

    def sources_enabled(self, selected: Optional[Union[str, list[str]]] = None) -> list[str]:
        """Names of the sources to query: the ``selected`` subset or every source not disabled in config."""
        sources_config = cast(dict[str, Any], self.config.get("SOURCES", {}))

        if selected is None:
            names = list(source_class_map)
        elif isinstance(selected, str):
            names = selected.split(",")
        else:
            names = [str(s) for s in selected]
        names = list(dict.fromkeys(name.strip().upper() for name in names if name.strip()))

        valid_sources = [s for s in names if s in source_class_map]
        for source in set(names) - set(valid_sources):
            console.print(f"Warning: Source '{source}' is not recognized and will be ignored.", markup=False)

        enabled: list[str] = []
        for source in valid_sources:
            source_config = cast(dict[str, Any], sources_config.get(source, {}) or {})
            if source_config.get("enabled", True):
                enabled.append(source)
            elif selected is not None:
                console.print(f"[yellow]Source '{source}' is disabled in config, skipping[/yellow]")
        return enabled

    def build_sources(self, selected: Optional[Union[str, list[str]]] = None) -> list[Source]:
        sources: list[Source] = []
        for name in self.sources_enabled(selected):
            instance = self._create_source_instance(name)
            if instance is not None:
                sources.append(instance)
        return sources


async def close_sources(sources: list[Source]) -> None:
    for source in sources:
        close = getattr(source, "close", None)
        if close is not None:
            await close()


source_class_map: dict[str, type[Any]] = {
    "AVSOX": AVSOX,
    "FC2PPVDB": FC2PPVDB,
    "JAVDB": JAVDB,
    "SUBTITLECAT": SUBTITLECAT,
}
