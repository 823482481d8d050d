# Upload Assistant © 2025 Audionut & wastaken7 — Licensed under UAPL v1.0
"""
Filename -> identity parsing.

Two identifier families are recognised, tried in this order:

- ``Special``: ``FC2`` codes, with or without the ``PPV`` marker
  (``FC2-PPV-3234``, ``FC2 3234``, ``FC2PPV3234``)
- ``Standard``: alphabetic prefix followed by a numeric code
  (``STARS-804``, ``STARS 804``, ``STARS804``)

Both accept an optional part index after the code (``-2``, ``CD2``) and
ignore whatever annotation follows it.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import ClassVar, Union

from typing_extensions import TypeAlias

from metacap.console import console
from metacap.exceptions import ParseError

_SEP = r"[- ]*"

SPECIAL_PATTERN = re.compile(
    rf"FC2{_SEP}(?:PPV)?{_SEP}(?P<code>[0-9]+){_SEP}(?:CD)?(?P<part>[0-9]*)(?P<rest>.*)",
    re.DOTALL,
)
STANDARD_PATTERN = re.compile(
    rf"(?P<prefix>[A-Z]+){_SEP}(?P<code>[0-9]+){_SEP}(?:CD)?(?P<part>[0-9]*)(?P<rest>.*)",
    re.DOTALL,
)
LEADING_JUNK = re.compile(r"^[^0-9A-Z]+")

# Studios whose releases are Chinese productions rather than Japanese ones
CHINA_PREFIXES = frozenset({
    "MD", "LY", "MDHG", "MSD", "SZL", "MDSR", "MDCM", "PCM", "YCM", "KCM",
    "PMX", "PM", "PMS", "EMX", "GDCM", "XKTV", "XKKY", "XKG", "XKVP", "TM",
    "TML", "TMT", "TMTC", "TMW", "JDYG", "JD", "JDKR", "RAS", "XSJKY",
    "XSJYH", "XSJ", "IDG", "FSOG", "QDOG", "TZ", "DAD",
})


def _check_code(code: str) -> str:
    if not code or not (code.isascii() and code.isdigit()):
        raise ValueError(f"code must be digits only, got {code!r}")
    return code


@dataclass(frozen=True)
class Special:
    code: str
    # part only names the output file, it is not part of the identity
    part: int = field(default=0, compare=False)

    kind: ClassVar[str] = "special"

    def __post_init__(self) -> None:
        _check_code(self.code)

    @property
    def name(self) -> str:
        return f"FC2-PPV-{self.code}"

    def __str__(self) -> str:
        return self.name

    def matches(self, text: str) -> bool:
        return matches(self, text)


@dataclass(frozen=True)
class Standard:
    prefix: str
    code: str
    part: int = field(default=0, compare=False)

    kind: ClassVar[str] = "standard"

    def __post_init__(self) -> None:
        if not self.prefix or not (self.prefix.isascii() and self.prefix.isalpha()):
            raise ValueError(f"prefix must be alphabetic, got {self.prefix!r}")
        object.__setattr__(self, "prefix", self.prefix.upper())
        _check_code(self.code)

    @property
    def name(self) -> str:
        return f"{self.prefix}-{self.code}"

    def __str__(self) -> str:
        return self.name

    def matches(self, text: str) -> bool:
        return matches(self, text)


Identity: TypeAlias = Union[Special, Standard]


def _part(value: str) -> int:
    return int(value) if value else 0


def parse(raw_name: str, debug: bool = False) -> Identity:
    """Parse a file base name (no extension) into an Identity.

    Raises ParseError when neither grammar matches.
    """
    # full-width letters and digits fold to ASCII
    name = LEADING_JUNK.sub("", unicodedata.normalize("NFKC", raw_name).upper())

    identity: Identity
    special = SPECIAL_PATTERN.match(name)
    if special:
        identity = Special(special["code"], _part(special["part"]))
        rest = special["rest"]
    else:
        standard = STANDARD_PATTERN.match(name)
        if not standard:
            raise ParseError("identity not found", raw_name)
        identity = Standard(standard["prefix"], standard["code"], _part(standard["part"]))
        rest = standard["rest"]

    if debug:
        console.print(f"[cyan]Parsed {raw_name!r} as {identity} (part {identity.part}), ignored {rest!r}[/cyan]")
    return identity


def matches(identity: Identity, candidate: str) -> bool:
    """True when ``candidate`` parses to the same identity, part ignored."""
    try:
        other = parse(candidate.strip())
    except ParseError:
        return False
    return other == identity


def default_country(identity: Identity) -> str:
    if isinstance(identity, Standard) and identity.prefix in CHINA_PREFIXES:
        return "China"
    return "Japan"
