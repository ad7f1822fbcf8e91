"""Line formatting for revealed text.

Splits text into header, bullet, and paragraph lines and turns paired
``**`` markers into emphasis spans. Lines are parsed independently and
memoized, so re-formatting a growing prefix only parses the line that is
still being written.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

BULLET_MARKERS = ("-", "•")
_EMPHASIS = re.compile(r"\*\*(.+?)\*\*")


class LineKind(str, Enum):
    HEADER = "header"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Span:
    text: str
    emphasis: bool = False


@dataclass(frozen=True)
class FormattedLine:
    kind: LineKind
    spans: tuple[Span, ...]

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


def _spans(body: str) -> tuple[Span, ...]:
    spans: list[Span] = []
    position = 0
    for match in _EMPHASIS.finditer(body):
        if match.start() > position:
            spans.append(Span(body[position : match.start()]))
        spans.append(Span(match.group(1), emphasis=True))
        position = match.end()
    if position < len(body):
        spans.append(Span(body[position:]))
    return tuple(spans)


@lru_cache(maxsize=2048)
def format_line(line: str) -> FormattedLine:
    """Classify one line and parse its emphasis markers.

    Bullets win over headers, so ``- Note:`` is a bullet. An unpaired
    ``**`` stays literal until its closing marker arrives.
    """
    stripped = line.strip()
    if stripped.startswith(BULLET_MARKERS):
        return FormattedLine(LineKind.BULLET, _spans(stripped[1:].lstrip()))
    if stripped.endswith(":"):
        return FormattedLine(LineKind.HEADER, _spans(stripped))
    return FormattedLine(LineKind.PARAGRAPH, _spans(stripped))


def format_text(text: str) -> list[FormattedLine]:
    """Format every line of a text."""
    return [format_line(line) for line in text.split("\n")]


class IncrementalFormatter:
    """Formats successive prefixes of one text.

    Completed lines are kept; each call parses only the newly arrived
    characters and the trailing, still-open line. Feeding a shorter text,
    or one whose open line changed, starts over.
    """

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._length = 0
        self._line_start = 0
        self._tail = ""
        self._done: list[FormattedLine] = []

    def feed(self, text: str) -> list[FormattedLine]:
        if len(text) < self._length or not text.startswith(self._tail, self._line_start):
            self.reset()

        newline = text.find("\n", self._length)
        while newline != -1:
            self._done.append(format_line(text[self._line_start : newline]))
            self._line_start = newline + 1
            newline = text.find("\n", self._line_start)

        self._length = len(text)
        self._tail = text[self._line_start :]
        return [*self._done, format_line(self._tail)]


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _inline_html(line: FormattedLine) -> str:
    return "".join(
        f"<strong>{_escape(span.text)}</strong>" if span.emphasis else _escape(span.text)
        for span in line.spans
    )


def to_html(lines: list[FormattedLine]) -> str:
    """Render formatted lines as HTML for chat display."""
    parts: list[str] = []
    in_list = False
    for line in lines:
        if line.kind is LineKind.BULLET:
            if not in_list:
                parts.append('<ul class="list-disc list-inside my-1 space-y-1">')
                in_list = True
            parts.append(f"<li>{_inline_html(line)}</li>")
            continue

        if in_list:
            parts.append("</ul>")
            in_list = False
        match line.kind:
            case LineKind.HEADER:
                parts.append(f'<div class="font-semibold mt-2">{_inline_html(line)}</div>')
            case LineKind.PARAGRAPH if line.spans:
                parts.append(f"<p>{_inline_html(line)}</p>")
            case LineKind.PARAGRAPH:
                parts.append("<br>")
    if in_list:
        parts.append("</ul>")
    return "".join(parts)
