# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from typing import Protocol, runtime_checkable

from metacap.identity import Identity
from metacap.record import Record


@runtime_checkable
class Source(Protocol):
    """One external metadata provider.

    ``find`` returns an empty Record when the site has nothing for the
    identity and raises SourceError only for transport or parse failures.
    """

    name: str

    def supports(self, identity: Identity) -> bool: ...

    async def find(self, identity: Identity) -> Record: ...
