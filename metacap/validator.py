# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
from metacap.exceptions import Rejected
from metacap.identity import Identity, Special, Standard
from metacap.record import Record

REQUIRED_FIELDS: dict[type, tuple[str, ...]] = {
    Standard: ("title", "plot", "runtime", "genres", "director", "premiered", "studio", "actors", "poster", "fanart"),
    # Special releases rarely carry cover art or tags
    Special: ("title", "plot", "runtime", "director", "premiered", "studio", "actors", "fanart"),
}


def fix_up(record: Record, identity: Identity) -> None:
    if not record.plot:
        record.plot = record.title
    if isinstance(identity, Special) and not record.actors and record.director:
        # Special sellers are usually the performer as well
        record.actors = {record.director}


def missing_fields(record: Record, identity: Identity) -> list[str]:
    return [name for name in REQUIRED_FIELDS[type(identity)] if not getattr(record, name)]


def finish(record: Record, identity: Identity) -> Record:
    """Fix up ``record`` in place and return it if complete.

    Raises Rejected listing every required field that is still empty.
    """
    fix_up(record, identity)
    missing = missing_fields(record, identity)
    if missing:
        raise Rejected(missing, identity)
    return record
