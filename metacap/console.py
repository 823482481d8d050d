# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from rich.console import Console

console = Console()
