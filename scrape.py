#!/usr/bin/env python3
# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import asyncio
import os
import platform
import shutil
import sys
from typing import Any, cast

from data.version import __version__
from metacap.args import Args
from metacap.configvalidator import format_validation_results, validate_config
from metacap.console import console
from metacap.discovery import discover
from metacap.pipeline import Pipeline
from metacap.sourcesetup import SOURCE_SETUP, close_sources
from metacap.translate import TranslationManager, build_translators

base_dir = os.path.abspath(os.path.dirname(__file__))
_config_path = os.path.join(base_dir, "data", "config.py")
_example_config_path = os.path.join(base_dir, "data", "example-config.py")


def load_config() -> dict[str, Any]:
    if not os.path.exists(_config_path):
        if not os.path.exists(_example_config_path):
            console.print(f"[red]Configuration file not found: {_config_path}[/red]")
            sys.exit(1)
        shutil.copy2(_example_config_path, _config_path)
        console.print(f"[yellow]No config.py found, created {_config_path} from example-config.py. Edit it and run again.[/yellow]")
        sys.exit(1)

    try:
        from data.config import config as _imported_config  # pyright: ignore[reportMissingImports]
    except SyntaxError as e:
        console.print(f"[red]Syntax error in config.py line {e.lineno}: {e.msg}[/red]")
        sys.exit(1)
    except NameError as e:
        console.print(f"[red]Name error in config.py: {e}[/red]")
        console.print("[green]  Suggestion: check True/False/None capitalisation and string quotes[/green]")
        sys.exit(1)
    return cast(dict[str, Any], _imported_config)


async def do_the_thing(config: dict[str, Any], settings: dict[str, Any]) -> int:
    config["DEFAULT"]["debug"] = settings["debug"]
    config["DEFAULT"]["output_dir"] = settings["output_dir"]

    path = settings["path"]
    if not os.path.isdir(path):
        console.print(f"[red]Input directory does not exist: {path}[/red]")
        return 1

    default = config["DEFAULT"]
    videos = discover(path, default.get("exts", ["mp4", "mkv"]), default.get("excludes", []), debug=settings["debug"])
    if not videos:
        console.print("[yellow]Nothing to do[/yellow]")
        return 0

    sources = SOURCE_SETUP(config).build_sources(settings["sources"])
    if not sources:
        console.print("[red]No source enabled[/red]")
        return 1

    translation = TranslationManager(build_translators(config) if settings["translate"] else [], debug=settings["debug"])
    try:
        summary = await Pipeline(config, sources, translation, dry_run=settings["dry_run"]).run(videos)
    finally:
        await close_sources(sources)
        await translation.close()
    return 1 if summary.failed else 0


def main() -> None:
    pyver = platform.python_version_tuple()
    if int(pyver[0]) != 3 or int(pyver[1]) < 10:
        console.print("[bold red]Python version is too low. Please use Python 3.10 or higher.")
        sys.exit(1)

    config = load_config()
    is_valid, errors, warnings = validate_config(config)
    if errors or warnings:
        console.print(format_validation_results(is_valid, errors, warnings), markup=False)
    if not is_valid:
        sys.exit(1)

    settings = Args(config).parse(sys.argv[1:])
    if settings["debug"]:
        console.print(f"[cyan]metacap {__version__}[/cyan]")

    try:
        code = asyncio.run(do_the_thing(config, settings))
    except KeyboardInterrupt:
        console.print("\n[yellow]Shutting down...[/yellow]")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
