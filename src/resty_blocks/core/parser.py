"""Document parser combining block scanning and classification.

The parser is configured once with settings and a YAML loader class and
then used for any number of documents. It keeps no per-document state:
every call receives the full document text and returns fresh blocks.
"""

from re import split
from typing import TYPE_CHECKING

from yaml import SafeLoader

from resty_blocks.settings import ParserSettings

from .classifier import TEST_KEY, classify
from .resolver import DependencyResolver
from .scanner import find_span, iter_spans

if TYPE_CHECKING:
    from yaml import BaseLoader

if TYPE_CHECKING:
    from resty_blocks.schema import Block, Resolution, Span


#: Line terminators of document text. Other Unicode line breaks are content.
LINE_BREAK = r'\r\n|\r|\n'


def split_lines(text: str) -> list[str]:
    """Split document text into lines without line terminators."""
    lines = split(LINE_BREAK, text)
    if lines[-1] == '':
        lines.pop()

    return lines


class DocumentParser:
    """Parser of fenced YAML blocks in Resty documents.

    Attributes:
        loader: YAML loader class used to parse block contents.
        settings: Fence markers, HTTP methods and strictness.
    """

    def __init__(self, loader: type['BaseLoader'] = SafeLoader,
                 settings: ParserSettings | None = None) -> None:
        """Initialize the document parser.

        Args:
            loader: YAML loader class to parse block contents with.
            settings: Parser settings. Read from the environment when
                not given.
        """
        self.loader = loader
        self.settings = settings if settings is not None else ParserSettings()

    @property
    def open_marker(self) -> str:
        """Opening fence marker."""
        return self.settings.open_marker

    @property
    def close_marker(self) -> str:
        """Closing fence marker."""
        return self.settings.close_marker

    def classify(self, lines: list[str], span: 'Span') -> 'Block':
        """Classify the contents of a span.

        Args:
            lines: Document lines the span was found in.
            span: Span to classify.

        Returns:
            Classified block.

        Raises:
            DocumentError: On a malformed `requires` value in strict mode.
        """
        return classify(
            span.interior(lines),
            span.start_line,
            span.end_line,
            loader=self.loader,
            http_methods=self.settings.http_methods,
            strict=self.settings.strict,
        )

    def find_block(self, text: str, line: int, column: int = 0) -> 'Block | None':  # noqa: ARG002
        """Find the block under a cursor position.

        Args:
            text: Full document text.
            line: Zero-based cursor line.
            column: Zero-based cursor column; blocks span whole lines,
                so the column does not affect the result.

        Returns:
            The classified enclosing block, or `None`.
        """
        lines = split_lines(text)

        span = find_span(lines, line, self.open_marker, self.close_marker)
        if span is None:
            return None

        return self.classify(lines, span)

    def find_all_blocks(self, text: str, *, valid_only: bool = True) -> tuple['Block', ...]:
        """Find all blocks of a document.

        Args:
            text: Full document text.
            valid_only: Whether to drop invalid blocks. Only valid
                blocks take part in dependency resolution.

        Returns:
            Classified blocks in document order.
        """
        lines = split_lines(text)

        blocks = (
            self.classify(lines, span)
            for span in iter_spans(lines, self.open_marker, self.close_marker)
        )

        return tuple(
            block
            for block in blocks
            if block.is_valid or not valid_only
        )

    def count_tests(self, text: str) -> int:
        """Count test declarations without parsing block contents.

        Every line inside a block that starts with the `test:` key is
        counted, whether or not the block is valid.

        Args:
            text: Full document text.

        Returns:
            Number of test declarations.
        """
        count = 0
        inside = False

        for line in split_lines(text):
            stripped = line.strip()

            if stripped.startswith(self.open_marker):
                inside = True
            elif inside and stripped == self.close_marker:
                inside = False
            elif inside and stripped.startswith(f'{TEST_KEY}:'):
                count += 1

        return count

    def resolver(self, text: str) -> DependencyResolver:
        """Build a dependency resolver over the valid blocks of a document.

        Args:
            text: Full document text.

        Returns:
            Resolver bound to a snapshot of the document.

        Raises:
            DocumentError: On a duplicate test name in strict mode.
        """
        return DependencyResolver(self.find_all_blocks(text), strict=self.settings.strict)

    def resolve(self, text: str, target: str) -> 'Resolution':
        """Resolve the execution order for a test of a document.

        Args:
            text: Full document text.
            target: Name of the test to run.

        Returns:
            Resolution result.

        Raises:
            DocumentError: On a duplicate test name in strict mode.
        """
        return self.resolver(text).resolve(target)
