# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""Kodi style movie.nfo + artwork writer for finished records."""

import asyncio
import os
import shutil
from typing import Any
from xml.sax.saxutils import escape

import aiofiles

from metacap.console import console
from metacap.discovery import Video
from metacap.record import Record


def render_nfo(record: Record) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8" standalone="yes" ?>',
        "<movie>",
        f"    <title>{escape(record.title)}</title>",
        f"    <originaltitle>{escape(record.title)}</originaltitle>",
        f"    <rating>{record.rating:.1f}</rating>",
        f"    <plot>{escape(record.plot)}</plot>",
        f"    <runtime>{record.runtime}</runtime>",
        f"    <mpaa>{escape(record.mpaa)}</mpaa>",
        f'    <uniqueid type="num" default="true">{escape(record.id)}</uniqueid>',
    ]
    genres = sorted(record.genres)
    lines.extend(f"    <genre>{escape(genre)}</genre>" for genre in genres)
    lines.extend(f"    <tag>{escape(genre)}</tag>" for genre in genres)
    lines.extend([
        f"    <country>{escape(record.country)}</country>",
        f"    <director>{escape(record.director)}</director>",
        f"    <premiered>{escape(record.premiered)}</premiered>",
        f"    <studio>{escape(record.studio)}</studio>",
    ])
    for actor in sorted(record.actors):
        lines.extend(["    <actor>", f"        <name>{escape(actor)}</name>", "    </actor>"])
    lines.append("</movie>")
    return "\n".join(lines) + "\n"


class NfoGenerator:
    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.debug = bool(config.get("DEFAULT", {}).get("debug", False))

    def target_dir(self, record: Record, output_dir: str) -> str:
        return os.path.join(output_dir, record.studio or "Unknown", record.id)

    @staticmethod
    def video_name(record: Record, video: Video, part: int, ext: str) -> str:
        if video.multipart:
            return f"{record.id}-cd{part}.{ext}"
        return f"{record.id}.{ext}"

    async def _write(self, path: str, data: bytes) -> None:
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

    async def write(self, record: Record, video: Video, output_dir: str) -> str:
        """Write nfo, artwork and subtitle, then move the video files in.

        Raises FileExistsError when the target directory is already there.
        """
        target = self.target_dir(record, output_dir)
        if os.path.exists(target):
            raise FileExistsError(f"{target} already exists")
        os.makedirs(target)

        loop = asyncio.get_running_loop()
        moved: list[tuple[str, str]] = []
        try:
            async with aiofiles.open(os.path.join(target, "movie.nfo"), "w", encoding="utf-8") as f:
                await f.write(render_nfo(record))
            if record.poster:
                await self._write(os.path.join(target, "poster.jpg"), record.poster)
            if record.fanart:
                await self._write(os.path.join(target, "fanart.jpg"), record.fanart)
            if record.subtitle:
                await self._write(os.path.join(target, f"{record.id}.srt"), record.subtitle)

            for file in video.files:
                destination = os.path.join(target, self.video_name(record, video, file.part, file.ext))
                await loop.run_in_executor(None, shutil.move, file.location, destination)
                moved.append((file.location, destination))
                if self.debug:
                    console.print(f"[cyan]Moved {file.location} -> {destination}[/cyan]")
        except Exception:
            await loop.run_in_executor(None, self._rollback, target, moved)
            raise

        return target

    @staticmethod
    def _rollback(target: str, moved: list[tuple[str, str]]) -> None:
        """Put moved videos back and remove the partial target so the item can be retried."""
        for location, destination in reversed(moved):
            try:
                shutil.move(destination, location)
            except OSError as e:
                console.print(f"[red]Could not move {destination} back to {location}: {e}[/red]")
                # keep the directory, it still holds the video
                return
        shutil.rmtree(target, ignore_errors=True)
