# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
import argparse
from collections.abc import Sequence
from typing import Any, cast


class Args:
    """
    Parse Args
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config
        self.default = cast(dict[str, Any], config.get("DEFAULT", {}))

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="scrape.py",
            usage="scrape.py [path] [options]",
            description="Identify video files by name, scrape their metadata and write nfo + artwork.",
        )
        parser.add_argument("path", nargs="?", help="Directory to scan (defaults to DEFAULT['input_dir'])", default=None)
        parser.add_argument("-o", "--output", dest="output_dir", required=False, help="Output directory (defaults to DEFAULT['output_dir'])", default=None)
        parser.add_argument(
            "--sources",
            required=False,
            help="Comma-separated subset of sources to query, e.g. AVSOX,JAVDB",
            type=str,
            default=None,
        )
        parser.add_argument("--dry-run", dest="dry_run", action="store_true", required=False, help="Scrape and validate, but do not write or move anything", default=False)
        parser.add_argument("--no-translate", dest="no_translate", action="store_true", required=False, help="Skip translating title and plot", default=False)
        parser.add_argument("-debug", "--debug", action="store_true", required=False, help="Print more information", default=False)
        return parser

    def parse(self, argv: Sequence[str]) -> dict[str, Any]:
        """Parse ``argv`` into a settings dict, falling back to config values."""
        args = self.build_parser().parse_args(list(argv))
        return {
            "path": args.path or self.default.get("input_dir", "."),
            "output_dir": args.output_dir or self.default.get("output_dir", "output"),
            "sources": args.sources,
            "dry_run": bool(args.dry_run),
            "translate": not args.no_translate,
            "debug": bool(args.debug or self.default.get("debug", False)),
        }
