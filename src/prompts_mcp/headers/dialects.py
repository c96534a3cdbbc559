"""Concrete metadata header dialects."""

import re

from prompts_mcp.headers.base import PatternHeaderParser


class FrontMatterParser(PatternHeaderParser):
    """Delimited block between two ``---`` lines.

    ---
    description: Convert documents to docx
    triggers: word, docx
    ---
    """

    name = "front-matter"
    pattern = re.compile(r"\A---\s*\n(.*?)\n---\s*\n?(.*)\Z", re.DOTALL)


class CommentHeaderParser(PatternHeaderParser):
    """Single HTML comment block: ``<!-- description: ... -->``."""

    name = "comment"
    pattern = re.compile(r"\A<!--\s*(.*?)\s*-->\n?(.*)\Z", re.DOTALL)
