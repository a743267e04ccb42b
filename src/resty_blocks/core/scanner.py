"""Line-oriented scanning of fenced regions.

Markers are matched on trimmed lines only: the opening marker by prefix
(so that trailing attributes after the language tag are tolerated) and
the closing marker by equality. Block contents are never inspected here.
"""

from typing import TYPE_CHECKING

from resty_blocks.schema import Span

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


def _is_open(line: str, open_marker: str) -> bool:
    return line.strip().startswith(open_marker)


def _is_close(line: str, close_marker: str) -> bool:
    return line.strip() == close_marker


def find_span(lines: 'Sequence[str]', line: int,
              open_marker: str, close_marker: str) -> Span | None:
    """Find the span enclosing a cursor line.

    Searches backward from the cursor for the nearest opening marker and
    forward for the nearest closing marker. A closing marker met before
    the opening one (or an opening marker met before the closing one)
    means the cursor sits between blocks.

    Args:
        lines: Document lines.
        line: Zero-based cursor line.
        open_marker: Opening fence marker including the language tag.
        close_marker: Bare closing fence marker.

    Returns:
        The enclosing span, or `None` if the cursor is outside any block.
    """
    if not 0 <= line < len(lines):
        return None

    start = end = -1

    for index in range(line, -1, -1):
        if _is_open(lines[index], open_marker):
            start = index
            break
        if index != line and _is_close(lines[index], close_marker):
            return None

    if start < 0:
        return None

    for index in range(line, len(lines)):
        if _is_close(lines[index], close_marker):
            end = index
            break
        if index != start and _is_open(lines[index], open_marker):
            return None

    if end <= start:
        return None

    return Span(start_line=start, end_line=end)


def iter_spans(lines: 'Sequence[str]',
               open_marker: str, close_marker: str) -> 'Iterator[Span]':
    """Iterate over all spans in document order.

    A single forward pass tracks whether the scan is inside a block.
    An opening marker met inside a block restarts it, and an opening
    marker left without a closing marker yields nothing.

    Args:
        lines: Document lines.
        open_marker: Opening fence marker including the language tag.
        close_marker: Bare closing fence marker.

    Yields:
        Spans of every terminated block.
    """
    start: int | None = None

    for index, line in enumerate(lines):
        if _is_open(line, open_marker):
            start = index
        elif start is not None and _is_close(line, close_marker):
            yield Span(start_line=start, end_line=index)
            start = None


def scan_spans(lines: 'Sequence[str]',
               open_marker: str, close_marker: str) -> tuple[Span, ...]:
    """Return all spans in document order.

    Args:
        lines: Document lines.
        open_marker: Opening fence marker including the language tag.
        close_marker: Bare closing fence marker.

    Returns:
        Spans of every terminated block.
    """
    return tuple(iter_spans(lines, open_marker, close_marker))
