# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Any, Optional


class ParseError(Exception):
    def __init__(self, reason: str = "identity not found", input: str = "") -> None:
        self.reason = reason
        self.input = input
        super().__init__(f"{reason}: {input!r}" if input else reason)


class SourceError(Exception):
    def __init__(self, *args: Any, source: str = "", **kwargs: Any) -> None:
        default_message = "An error occurred while querying the source"
        self.source = source
        # keep the caller's message when one is given
        if args:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message, **kwargs)


class Rejected(Exception):
    def __init__(self, missing: list[str], identity: Optional[Any] = None) -> None:
        self.missing = list(missing)
        self.identity = identity
        name = f"{identity} " if identity is not None else ""
        super().__init__(f"{name}incomplete, missing: {', '.join(self.missing)}")


class TranslateError(Exception):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        default_message = "An error occurred while translating"
        if args:
            super().__init__(*args, **kwargs)
        else:
            super().__init__(default_message, **kwargs)
