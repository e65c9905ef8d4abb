"""
Parsing of raw generated text into a title and body.
"""

import re
from dataclasses import dataclass

TITLE_MARKER = "TITLE:"
CONTENT_MARKER = "CONTENT:"
DEFAULT_TITLE = "Generated Article"

_WHITESPACE_RUN = re.compile(r"\s+")
_BLANK_LINE = re.compile(r"\n[ \t]*\n")


@dataclass
class ParsedArticle:
    title: str
    content: str
    word_count: int


def count_words(text: str) -> int:
    """
    Count words by splitting on whitespace runs.

    This is the single word-count rule used for generated and edited content.
    Note that an empty string counts as 1: splitting it yields one empty token.
    Leading or trailing whitespace likewise adds an empty token.
    """
    return len(_WHITESPACE_RUN.split(text))


def _trim_blank_lines(text: str) -> str:
    lines = text.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def _parse_markers(raw: str) -> tuple[str, str, bool]:
    title = ""
    buffer: list[str] = []
    in_content = False
    found_marker = False

    for line in raw.split("\n"):
        if line.startswith(TITLE_MARKER):
            title = line[len(TITLE_MARKER):].strip()
            found_marker = True
        elif line.startswith(CONTENT_MARKER):
            in_content = True
            found_marker = True
        elif in_content:
            buffer.append(line)

    return title, "\n".join(buffer), found_marker


def _parse_paragraphs(raw: str) -> tuple[str, str]:
    parts = _BLANK_LINE.split(raw, maxsplit=1)
    if len(parts) == 2 and parts[1].strip():
        return parts[0].strip(), parts[1]
    return DEFAULT_TITLE, raw


def parse_generated_content(raw: str) -> ParsedArticle:
    """
    Split provider output into title and content.

    Text carrying ``TITLE:`` / ``CONTENT:`` markers is parsed line by line.
    Without any marker the first blank-line-separated block is the title and
    the rest the body; a single block becomes the body under a default title.
    """
    title, content, found_marker = _parse_markers(raw)
    if not found_marker:
        title, content = _parse_paragraphs(raw)

    content = _trim_blank_lines(content)
    if not content:
        content = _trim_blank_lines(raw)

    title = title or DEFAULT_TITLE
    return ParsedArticle(title=title, content=content, word_count=count_words(content))
