"""Progressive disclosure of long-form results.

Responsibilities:
    - Paced, cancellable prefix sequences bound to one message
    - Header / bullet / paragraph line classification
    - Inline emphasis parsing and HTML rendering
"""

from verdict.reveal.formatter import (
    FormattedLine,
    IncrementalFormatter,
    LineKind,
    Span,
    format_line,
    format_text,
    to_html,
)
from verdict.reveal.renderer import RevealRenderer, RevealState, reveal_prefixes, stream

__all__ = [
    "FormattedLine",
    "IncrementalFormatter",
    "LineKind",
    "RevealRenderer",
    "RevealState",
    "Span",
    "format_line",
    "format_text",
    "reveal_prefixes",
    "stream",
    "to_html",
]
