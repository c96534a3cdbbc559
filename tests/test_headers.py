"""Tests for metadata header parsing."""

import pytest

from prompts_mcp.headers import (
    CommentHeaderParser,
    FrontMatterParser,
    extract_fields,
    parse_header,
)

SKILL_PARSERS = (
    FrontMatterParser(fields=("description", "triggers")),
    CommentHeaderParser(fields=("description",)),
)


class TestExtractFields:
    """Tests for key: value extraction from a raw header block."""

    def test_extracts_requested_keys(self) -> None:
        """Only requested keys are returned, values trimmed."""
        raw = "description:   Review code  \nauthor: someone\ntriggers: a, b"
        assert extract_fields(raw, ("description", "triggers")) == {
            "description": "Review code",
            "triggers": "a, b",
        }

    def test_unknown_keys_ignored(self) -> None:
        """Unrecognized keys do not cause errors."""
        assert extract_fields("version: 2\nowner: me", ("description",)) == {}

    def test_first_occurrence_wins(self) -> None:
        """A repeated key keeps its first value."""
        raw = "description: first\ndescription: second"
        assert extract_fields(raw, ("description",)) == {"description": "first"}

    def test_empty_value_skipped(self) -> None:
        """A key with no value is treated as absent."""
        assert extract_fields("description:   ", ("description",)) == {}

    def test_value_may_contain_colons(self) -> None:
        """Only the first colon separates key from value."""
        raw = "description: Usage: run it"
        assert extract_fields(raw, ("description",)) == {
            "description": "Usage: run it"
        }

    def test_lines_without_colon_skipped(self) -> None:
        """Free text inside the block is ignored."""
        assert extract_fields("just a note", ("description",)) == {}


class TestFrontMatterParser:
    """Tests for the --- delimited block dialect."""

    def test_parses_block(self) -> None:
        """Metadata is extracted and the block removed from the body."""
        parser = FrontMatterParser(fields=("description", "triggers"))
        parsed = parser.parse("---\ndescription: X\ntriggers: a, b\n---\nBody\n")

        assert parsed is not None
        assert parsed.metadata == {"description": "X", "triggers": "a, b"}
        assert parsed.body == "Body\n"
        assert parsed.dialect == "front-matter"

    def test_no_match_without_opening_delimiter(self) -> None:
        """Content not starting with --- does not match."""
        parser = FrontMatterParser()
        assert parser.parse("Intro\n---\ndescription: X\n---\nBody") is None

    def test_no_match_when_unclosed(self) -> None:
        """An opening --- without a closing line does not match."""
        parser = FrontMatterParser()
        assert parser.parse("---\ndescription: X\nBody") is None

    def test_block_without_known_keys(self) -> None:
        """A block with no recognized keys yields empty metadata."""
        parser = FrontMatterParser(fields=("description",))
        parsed = parser.parse("---\nname: thing\n---\nBody")

        assert parsed is not None
        assert parsed.metadata == {}
        assert parsed.body == "Body"


class TestCommentHeaderParser:
    """Tests for the <!-- ... --> comment dialect."""

    def test_single_line_comment(self) -> None:
        """A one-line comment header is parsed and stripped."""
        parser = CommentHeaderParser()
        parsed = parser.parse(
            "<!-- description: Review code -->\nReview this {{language}} code:\n"
        )

        assert parsed is not None
        assert parsed.metadata == {"description": "Review code"}
        assert parsed.body == "Review this {{language}} code:\n"
        assert parsed.dialect == "comment"

    def test_multi_line_comment(self) -> None:
        """Keys may be spread across lines inside the comment."""
        parser = CommentHeaderParser()
        parsed = parser.parse("<!--\ndescription: Multi\nauthor: me\n-->\nBody")

        assert parsed is not None
        assert parsed.metadata == {"description": "Multi"}
        assert parsed.body == "Body"

    def test_only_one_newline_removed(self) -> None:
        """A single newline after the closing marker is consumed, no more."""
        parser = CommentHeaderParser()
        parsed = parser.parse("<!-- description: x -->\n\nBody")

        assert parsed is not None
        assert parsed.body == "\nBody"

    def test_comment_not_at_start(self) -> None:
        """A comment later in the file is not a header."""
        parser = CommentHeaderParser()
        assert parser.parse("Title\n<!-- description: x -->\nBody") is None


class TestParseHeader:
    """Tests for ordered dialect selection."""

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "Plain text with {{var}}",
            "# Title\n\nSome body\n",
            "--- not front matter",
            "<!-- unterminated comment",
        ],
    )
    def test_no_header_returns_input_verbatim(self, content: str) -> None:
        """Without a header, metadata is empty and body equals the input."""
        parsed = parse_header(content, SKILL_PARSERS)

        assert parsed.metadata == {}
        assert parsed.body == content
        assert parsed.dialect is None

    def test_front_matter_takes_precedence(self) -> None:
        """The first parser that matches wins."""
        parsed = parse_header("---\ndescription: X\n---\nBody", SKILL_PARSERS)
        assert parsed.dialect == "front-matter"
        assert parsed.metadata == {"description": "X"}

    def test_falls_back_to_comment(self) -> None:
        """The comment dialect is tried when front matter is absent."""
        parsed = parse_header("<!-- description: Y -->\nBody", SKILL_PARSERS)
        assert parsed.dialect == "comment"
        assert parsed.metadata == {"description": "Y"}
        assert parsed.body == "Body"

    def test_fallback_dialect_uses_its_own_fields(self) -> None:
        """Triggers in a comment header are ignored for skills."""
        content = "<!--\ndescription: D\ntriggers: x, y\n-->\nBody"
        parsed = parse_header(content, SKILL_PARSERS)
        assert parsed.metadata == {"description": "D"}

    def test_front_matter_ignored_when_not_in_parsers(self) -> None:
        """Templates only recognize the comment header."""
        content = "---\ndescription: X\n---\nBody"
        parsed = parse_header(content, (CommentHeaderParser(),))
        assert parsed.metadata == {}
        assert parsed.body == content
