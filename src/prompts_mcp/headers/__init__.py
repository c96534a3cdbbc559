"""Metadata header parsing for artifact files."""

from collections.abc import Sequence

from prompts_mcp.headers.base import (
    HeaderMatch,
    HeaderParser,
    ParsedContent,
    PatternHeaderParser,
    extract_fields,
)
from prompts_mcp.headers.dialects import CommentHeaderParser, FrontMatterParser

__all__ = [
    "CommentHeaderParser",
    "FrontMatterParser",
    "HeaderMatch",
    "HeaderParser",
    "ParsedContent",
    "PatternHeaderParser",
    "extract_fields",
    "parse_header",
]


def parse_header(content: str, parsers: Sequence[HeaderParser]) -> ParsedContent:
    """Split raw file content into metadata and body.

    Parsers are tried in order and the first match wins. When none match,
    metadata is empty and the body is the content unchanged.

    Args:
        content: Raw file content.
        parsers: Header dialects in priority order.

    Returns:
        ParsedContent with metadata, body and the matching dialect name.
    """
    for parser in parsers:
        parsed = parser.parse(content)
        if parsed is not None:
            return parsed
    return ParsedContent(metadata={}, body=content, dialect=None)
