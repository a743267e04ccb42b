"""Core error taxonomy and exception hierarchy.

Document and resolution problems are normally reported as data values
(see `resty_blocks.schema.results`) tagged with an `ErrorKind`.
The exceptions and warnings defined here are used where a caller asks
for raising behavior: strict document building and unwrapping of
resolution results.
"""

from enum import StrEnum
from os import linesep
from typing import TypedDict

FORMAT_FILENAME = '<unicode string>'
FORMAT_INDENT = 4

CYCLE_ARROW = ' → '


class ErrorKind(StrEnum):
    """Kinds of problems reported for documents and resolutions."""

    #: Block content is not a structured mapping.
    PARSE_FAILURE = 'PARSE_FAILURE'
    #: Cursor position is not inside a fenced block.
    NO_BLOCK = 'NO_BLOCK'
    #: Block parses but has no `test` key.
    NOT_TEST_BLOCK = 'NOT_TEST_BLOCK'
    #: Block has a `test` key but is not executable.
    INVALID_TEST = 'INVALID_TEST'
    #: File name is not a Resty document.
    INVALID_FILE = 'INVALID_FILE'
    #: Resolution target does not exist.
    NOT_FOUND = 'NOT_FOUND'
    #: A required test does not exist.
    MISSING_DEPENDENCY = 'MISSING_DEPENDENCY'
    #: Required tests form a cycle.
    CIRCULAR_DEPENDENCY = 'CIRCULAR_DEPENDENCY'


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None

    #: Line number in the source file.
    line_num: int | None

    #: Name of the test associated with the error.
    test_name: str | None

    #: Cycle of test names, when the error is a circular dependency.
    cycle: tuple[str, ...] | None


class ErrorFormatter:
    """Utility class for formatting document-related errors."""

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)

        if cycle := context.get('cycle'):
            message += f"{' ' * FORMAT_INDENT}cycle {format_cycle(cycle)}{linesep}"

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: int = 0) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Number of spaces to indent with.

        Returns:
            A formatted location string including filename, line
            and test name when available.
        """
        prefix = ' ' * indent

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{prefix}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num + 1}'
        message += linesep

        if test_name := context.get('test_name'):
            message += f'{prefix}on test {test_name!r}{linesep}'

        return message


def format_cycle(cycle: tuple[str, ...] | list[str]) -> str:
    """Render a cycle path as `A → B → A`.

    Args:
        cycle: Ordered test names forming the cycle.

    Returns:
        The joined cycle path.
    """
    return CYCLE_ARROW.join(cycle)


class DuplicateTestWarning(UserWarning):
    """Warning emitted when a test name is declared more than once.

    Only the last declaration is kept for dependency resolution
    unless strict mode turns this into a `DocumentError`.
    """


class MalformedRequiresWarning(UserWarning):
    """Warning emitted when `requires` is not a list of test names.

    The test is kept without dependencies unless strict mode turns
    this into a `DocumentError`.
    """


class RestyError(Exception, ErrorFormatter):
    """Base exception for all resty-blocks errors.

    All custom exceptions raised by the library inherit from
    this class to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 kind: ErrorKind | None = None,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            kind: Optional error kind from the taxonomy.
            context: Error context containing optional location values.
        """
        self.message = message
        self.kind = kind
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class DocumentError(RestyError):
    """Error raised for inconsistent documents in strict mode."""


class ResolutionError(RestyError):
    """Error raised when a failed resolution result is unwrapped."""
