# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import asyncio
from collections.abc import Sequence
from typing import Any

from metacap.console import console
from metacap.exceptions import SourceError
from metacap.identity import Identity
from metacap.record import Record
from metacap.sources.base import Source


class Aggregator:
    def __init__(self, debug: bool = False) -> None:
        self.debug = debug

    async def run(self, identity: Identity, sources: Sequence[Source]) -> Record:
        """Query every source supporting ``identity`` and merge what they return.

        A failing source contributes nothing; it never fails the run.
        """
        supporting: list[Source] = []
        for source in sources:
            if source.supports(identity):
                supporting.append(source)
            elif self.debug:
                console.print(f"[cyan]{source.name} does not support {identity}, skipping[/cyan]")

        record = Record.for_identity(identity)
        if not supporting:
            console.print(f"[yellow]No source supports {identity}[/yellow]")
            return record

        results: list[Any] = await asyncio.gather(
            *[source.find(identity) for source in supporting],
            return_exceptions=True,
        )

        contributed: list[str] = []
        for source, result in zip(supporting, results):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                # cancellation and interpreter shutdown are not source failures
                raise result
            if isinstance(result, Exception):
                error = result if isinstance(result, SourceError) else SourceError(f"{type(result).__name__}: {result}", source=source.name)
                console.print(f"[red]{source.name}: could not find {identity}: {error}[/red]")
                continue
            if not isinstance(result, Record):
                console.print(f"[red]{source.name}: returned {type(result).__name__} instead of a record for {identity}[/red]")
                continue
            if not result.is_empty():
                contributed.append(source.name)
            record.merge(result)

        if self.debug:
            if contributed:
                console.print(f"[cyan]{identity}: data from {', '.join(contributed)}[/cyan]")
            else:
                console.print(f"[cyan]{identity}: no source had data[/cyan]")
        return record
