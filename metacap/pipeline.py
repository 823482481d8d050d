# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, cast

from metacap.aggregator import Aggregator
from metacap.console import console
from metacap.discovery import Video
from metacap.exceptions import Rejected
from metacap.identity import Identity
from metacap.nfo_generator import NfoGenerator
from metacap.record import Record
from metacap.sources.base import Source
from metacap.translate import TranslationManager
from metacap.validator import finish


@dataclass
class RunSummary:
    succeed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.succeed) + len(self.failed)


class Pipeline:
    def __init__(
        self,
        config: dict[str, Any],
        sources: Sequence[Source],
        translation: Optional[TranslationManager] = None,
        dry_run: bool = False,
    ) -> None:
        self.config = config
        default = cast(dict[str, Any], config.get("DEFAULT", {}))
        self.debug = bool(default.get("debug", False))
        self.output_dir = str(default.get("output_dir", "output"))
        self.task_limit = max(1, int(default.get("task_limit", 4)))
        self.sources = list(sources)
        self.translation = translation
        self.dry_run = dry_run
        self.aggregator = Aggregator(debug=self.debug)
        self.nfo_generator = NfoGenerator(config)

    async def process(self, video: Video) -> Record:
        """Aggregate, finish, translate and (unless dry run) write one video.

        Raises Rejected when the merged record is incomplete.
        """
        identity = video.identity
        record = await self.aggregator.run(identity, self.sources)
        record = finish(record, identity)

        if self.translation is not None and self.translation.enabled:
            await self.translation.translate_record(record)

        if self.debug:
            console.print(record.summary())

        if not self.dry_run:
            target = await self.nfo_generator.write(record, video, self.output_dir)
            console.print(f"[green]{identity}: written to {target}[/green]")
        return record

    async def run(self, videos: dict[Identity, Video]) -> RunSummary:
        summary = RunSummary()
        semaphore = asyncio.Semaphore(self.task_limit)
        total = len(videos)

        async def process_one(video: Video) -> None:
            name = str(video.identity)
            async with semaphore:
                try:
                    await self.process(video)
                except Rejected as e:
                    summary.failed[name] = f"missing {', '.join(e.missing)}"
                except OSError as e:
                    summary.failed[name] = f"could not write output: {e}"
                except Exception as e:
                    console.print_exception()
                    summary.failed[name] = f"unexpected error: {e}"
                else:
                    summary.succeed.append(name)

            status = "[green]done[/green]" if name in summary.succeed else f"[red]failed[/red] ({summary.failed[name]})"
            console.print(f"[bold]{name}[/bold] ({summary.total}/{total}) {status}")

        await asyncio.gather(*[process_one(video) for video in videos.values()])
        self.print_summary(summary)
        return summary

    @staticmethod
    def print_summary(summary: RunSummary) -> None:
        console.rule("Summary")
        console.print(f"[green]Succeeded: {len(summary.succeed)}[/green] {', '.join(sorted(summary.succeed))}")
        console.print(f"[red]Failed: {len(summary.failed)}[/red]")
        for name, reason in sorted(summary.failed.items()):
            console.print(f"  [red]{name}[/red]: {reason}")
