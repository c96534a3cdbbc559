"""Placeholder extraction."""

import re

# {{identifier}} where identifier is [A-Za-z0-9_]+
VARIABLE_PATTERN = re.compile(r"\{\{(\w+)\}\}", re.ASCII)


def extract_variables(text: str) -> tuple[str, ...]:
    """Return the distinct placeholder names in ``text``.

    Names are returned in order of first appearance.
    """
    return tuple(dict.fromkeys(m.group(1) for m in VARIABLE_PATTERN.finditer(text)))
