# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

from metacap.identity import Identity, default_country

DEFAULT_MPAA = "NC-17"

TEXT_FIELDS = ("title", "plot", "director", "studio", "premiered")
NUMBER_FIELDS = ("runtime", "rating")
SET_FIELDS = ("genres", "actors")
BINARY_FIELDS = ("poster", "fanart", "subtitle")
# seeded from the identity, never taken from source data
SEEDED_FIELDS = ("id", "mpaa", "country")

_T = TypeVar("_T", str, bytes)


def _pick_longer(left: _T, right: _T) -> _T:
    if len(right) > len(left):
        return right
    if len(right) == len(left) and right > left:
        # equal length: order-independent choice
        return right
    return left


@dataclass
class Record:
    id: str = ""
    title: str = ""
    plot: str = ""
    runtime: int = 0
    rating: float = 0.0
    premiered: str = ""
    mpaa: str = ""
    country: str = ""
    studio: str = ""
    director: str = ""
    genres: set[str] = field(default_factory=set)
    actors: set[str] = field(default_factory=set)
    poster: bytes = b""
    fanart: bytes = b""
    subtitle: bytes = b""

    @classmethod
    def for_identity(cls, identity: Identity) -> "Record":
        return cls(id=identity.name, mpaa=DEFAULT_MPAA, country=default_country(identity))

    def merge(self, other: "Record") -> "Record":
        """Fold ``other`` into this record and return ``self``.

        Commutative and idempotent field by field, so the order in which
        sources finish does not change the result.
        """
        for name in TEXT_FIELDS + BINARY_FIELDS:
            setattr(self, name, _pick_longer(getattr(self, name), getattr(other, name)))
        for name in NUMBER_FIELDS:
            setattr(self, name, max(getattr(self, name), getattr(other, name)))
        for name in SET_FIELDS:
            getattr(self, name).update(getattr(other, name))
        return self

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in TEXT_FIELDS + NUMBER_FIELDS + SET_FIELDS + BINARY_FIELDS)

    def summary(self) -> dict[str, Any]:
        """Printable view: blobs replaced by their size."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bytes):
                value = f"<{len(value)} bytes>"
            elif isinstance(value, set):
                value = sorted(value)
            data[f.name] = value
        return data
