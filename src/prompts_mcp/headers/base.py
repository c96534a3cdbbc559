"""Base metadata header parser interface."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class HeaderMatch:
    """A header block found at the start of a file.

    ``raw`` is the text between the header markers, ``body`` is everything
    after the closing marker.
    """

    raw: str
    body: str


@dataclass(frozen=True)
class ParsedContent:
    """Metadata and body split out of raw file content."""

    metadata: dict[str, str] = field(default_factory=dict)
    body: str = ""
    dialect: str | None = None  # name of the parser that matched, if any


def extract_fields(raw: str, fields: Iterable[str]) -> dict[str, str]:
    """Extract ``key: value`` lines for the given keys from a header block.

    Values are trimmed. Unknown keys, lines without a colon and empty values
    are skipped. The first line for a key wins.
    """
    wanted = set(fields)
    metadata: dict[str, str] = {}

    for line in raw.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key not in wanted or key in metadata:
            continue
        value = value.strip()
        if value:
            metadata[key] = value

    return metadata


class HeaderParser(ABC):
    """Base class for metadata header dialects."""

    name: str

    def __init__(self, fields: Iterable[str] = ("description",)) -> None:
        self.fields: tuple[str, ...] = tuple(fields)

    @abstractmethod
    def match(self, content: str) -> HeaderMatch | None:
        """Match a header at the very start of ``content``.

        Args:
            content: Raw file content.

        Returns:
            HeaderMatch if this dialect's header is present, else None.
        """
        ...

    def parse(self, content: str) -> ParsedContent | None:
        """Split ``content`` into metadata and body, or None on no match."""
        header = self.match(content)
        if header is None:
            return None
        return ParsedContent(
            metadata=extract_fields(header.raw, self.fields),
            body=header.body,
            dialect=self.name,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fields={self.fields!r})"


class PatternHeaderParser(HeaderParser):
    """Header dialect described by one regex.

    Subclasses set ``pattern`` with two groups: the raw header block and
    the remaining body.
    """

    pattern: re.Pattern[str]

    def match(self, content: str) -> HeaderMatch | None:
        m = self.pattern.match(content)
        if m is None:
            return None
        return HeaderMatch(raw=m.group(1), body=m.group(2))
