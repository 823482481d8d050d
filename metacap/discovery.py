# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import os
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from metacap.console import console
from metacap.exceptions import ParseError
from metacap.identity import Identity, parse


@dataclass
class VideoFile:
    location: str
    ext: str
    part: int = 0


@dataclass
class Video:
    identity: Identity
    files: list[VideoFile] = field(default_factory=list)

    @property
    def multipart(self) -> bool:
        return len(self.files) > 1


def walk(path: str, excludes: Iterable[str] = ()) -> list[str]:
    excluded = set(excludes)
    found: list[str] = []
    for root, dirs, files in os.walk(path):
        dirs[:] = sorted(d for d in dirs if d not in excluded)
        for name in sorted(files):
            if name not in excluded:
                found.append(os.path.join(root, name))
    return found


def discover(path: str, exts: Iterable[str], excludes: Iterable[str] = (), debug: bool = False) -> dict[Identity, Video]:
    """Group the video files below ``path`` by the identity parsed from their names."""
    allowed = {ext.lower().lstrip(".") for ext in exts}
    videos: dict[Identity, Video] = {}
    skipped: list[str] = []

    for file in walk(path, excludes):
        stem, ext = os.path.splitext(os.path.basename(file))
        ext = ext.lstrip(".")
        if ext.lower() not in allowed:
            continue
        try:
            identity = parse(stem, debug=debug)
        except ParseError:
            skipped.append(os.path.basename(file))
            continue

        key = replace(identity, part=0)
        video = videos.setdefault(key, Video(key))
        video.files.append(VideoFile(location=file, ext=ext, part=identity.part))

    for video in videos.values():
        video.files.sort(key=lambda f: f.part)

    for name in skipped:
        console.print(f"[yellow]Could not recognise an identifier in '{name}', skipping[/yellow]")
    console.print(f"Found {len(videos)} video(s): {', '.join(str(v) for v in videos)}", markup=False)
    return videos
