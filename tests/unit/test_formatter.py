"""Unit tests for reveal line formatting."""

import pytest_check as check

from verdict.reveal.formatter import (
    IncrementalFormatter,
    LineKind,
    Span,
    format_line,
    format_text,
    to_html,
)
from verdict.reveal.renderer import reveal_prefixes

SUMMARY = "Key Points:\n- Revenue up\n• Costs **down** sharply\nOverall **good** year."


class TestFormatLine:
    """Tests for single-line classification."""

    def test_header(self) -> None:
        """Lines ending with a colon are headers."""
        line = format_line("Key Points:")

        check.equal(line.kind, LineKind.HEADER)
        check.equal(line.text, "Key Points:")

    def test_bullets(self) -> None:
        """Dash and bullet-dot lines are bullets without their marker."""
        check.equal(format_line("- Revenue up").spans, (Span("Revenue up"),))
        check.equal(format_line("  • Costs down").kind, LineKind.BULLET)
        check.equal(format_line("- Note:").kind, LineKind.BULLET)

    def test_paragraph_with_emphasis(self) -> None:
        """Paired markers become emphasis spans."""
        line = format_line("Overall **good** year.")

        check.equal(line.kind, LineKind.PARAGRAPH)
        check.equal(
            line.spans,
            (Span("Overall "), Span("good", emphasis=True), Span(" year.")),
        )

    def test_unpaired_marker_stays_literal(self) -> None:
        """An open marker is plain text until it closes."""
        check.equal(format_line("so **goo").spans, (Span("so **goo"),))
        check.equal(format_line("so **good**").spans[-1], Span("good", emphasis=True))

    def test_idempotent(self) -> None:
        """Formatting the same text twice gives the same result."""
        assert format_text(SUMMARY) == format_text(SUMMARY)


class TestIncrementalFormatter:
    """Tests for formatting growing prefixes."""

    def test_every_prefix_matches_full_formatting(self) -> None:
        """Incremental output equals formatting each prefix from scratch."""
        formatter = IncrementalFormatter()

        for prefix in reveal_prefixes(SUMMARY):
            check.equal(formatter.feed(prefix), format_text(prefix))

    def test_shorter_text_restarts(self) -> None:
        """Feeding an unrelated or shorter text starts over."""
        formatter = IncrementalFormatter()
        formatter.feed("First:\n- one")

        check.equal(formatter.feed("Other"), format_text("Other"))
        check.equal(formatter.feed("Otter text"), format_text("Otter text"))


class TestToHtml:
    """Tests for HTML rendering."""

    def test_summary_structure(self) -> None:
        """Header, bullet list, and emphasis render as HTML."""
        html = to_html(format_text("Key Points:\n- Revenue up\n- Costs **down**"))

        check.is_in('<div class="font-semibold mt-2">Key Points:</div>', html)
        check.equal(html.count("<li>"), 2)
        check.equal(html.count("<ul"), 1)
        check.is_in("<strong>down</strong>", html)
        check.is_true(html.endswith("</ul>"))

    def test_escapes_html(self) -> None:
        """Markup in the text is escaped."""
        html = to_html(format_text("a <b> & c"))

        assert html == "<p>a &lt;b&gt; &amp; c</p>"

    def test_blank_line(self) -> None:
        """Blank lines render as line breaks."""
        assert to_html(format_text("one\n\ntwo")) == "<p>one</p><br><p>two</p>"
