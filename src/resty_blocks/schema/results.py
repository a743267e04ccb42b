"""Result values of validation and dependency resolution.

Failures are returned as data, never raised: callers decide how to
present them. `Resolution.unwrap` is provided for callers that prefer
an exception-based flow.
"""

from typing import Self

from pydantic import Field, model_validator

from resty_blocks.errors import ErrorContext, ErrorKind, ResolutionError, format_cycle
from resty_blocks.models import SchemaModel

from .blocks import Block  # noqa: TC001

SECTION_SEPARATOR = '\n\n'


class Failure(SchemaModel):
    """Single descriptive problem with a document or a resolution."""

    kind: ErrorKind

    name: str | None = Field(
        default=None,
        title='Test name',
        description=(
            'Name of the offending test: the target for `NOT_FOUND`, '
            'the absent test for `MISSING_DEPENDENCY`.'
        ),
    )

    required_by: str | None = Field(
        default=None,
        title='Dependent test',
        description='Test declaring the absent dependency, if known.',
    )

    cycle: tuple[str, ...] = Field(
        default=(),
        title='Cycle path',
        description='Ordered test names forming a circular dependency.',
    )

    @property
    def message(self) -> str:  # noqa: PLR0911
        """Short human-readable description of the failure."""
        match self.kind:
            case ErrorKind.NO_BLOCK:
                return 'Cursor is not in a YAML code block.'
            case ErrorKind.NOT_TEST_BLOCK:
                return 'Cursor is in a YAML block, but it does not appear to be a Resty test block.'
            case ErrorKind.INVALID_TEST:
                return 'Invalid YAML or missing HTTP method (get, post, put, etc.).'
            case ErrorKind.INVALID_FILE:
                return f'File {self.name!r} is not a Resty document.'
            case ErrorKind.NOT_FOUND:
                return f'Test {self.name!r} not found in file'
            case ErrorKind.MISSING_DEPENDENCY if self.required_by:
                return f'Test {self.required_by!r} requires {self.name!r} which does not exist'
            case ErrorKind.MISSING_DEPENDENCY:
                return f'Required test {self.name!r} not found'
            case ErrorKind.CIRCULAR_DEPENDENCY:
                return f'Circular dependency detected: {format_cycle(self.cycle)}'
            case ErrorKind.PARSE_FAILURE:
                return 'Block content is not a YAML mapping.'

        return str(self.kind)

    def to_error(self, filename: str | None = None) -> ResolutionError:
        """Convert the failure into an exception.

        Args:
            filename: Optional source file name for the error context.

        Returns:
            An error carrying the failure kind and context.
        """
        context = ErrorContext(filename=filename, test_name=self.name)
        if self.cycle:
            context['cycle'] = self.cycle

        return ResolutionError(self.message, kind=self.kind, context=context)


class Resolution(SchemaModel):
    """Outcome of resolving the execution order for a target test.

    Holds either the ordered blocks or a failure, never both.
    """

    target: str

    blocks: tuple[Block, ...] = ()

    failure: Failure | None = None

    @model_validator(mode='after')
    def _check_outcome(self) -> Self:
        if self.failure is not None and self.blocks:
            raise ValueError('Failed resolution can not carry blocks')
        return self

    @classmethod
    def fail(cls, target: str, kind: ErrorKind, **details: object) -> Self:
        """Build a failed resolution.

        Args:
            target: Name of the requested test.
            kind: Kind of the failure.
            details: Extra `Failure` fields.

        Returns:
            Resolution without blocks.
        """
        return cls(target=target, failure=Failure(kind=kind, **details))

    @property
    def ok(self) -> bool:
        """Whether the resolution succeeded."""
        return self.failure is None

    @property
    def contents(self) -> tuple[str, ...]:
        """Raw contents of the resolved blocks, in execution order."""
        return tuple(block.content for block in self.blocks)

    def unwrap(self, filename: str | None = None) -> tuple[Block, ...]:
        """Return the resolved blocks or raise the failure.

        Args:
            filename: Optional source file name for error reporting.

        Returns:
            Ordered blocks.

        Raises:
            ResolutionError: If the resolution failed.
        """
        if self.failure is not None:
            raise self.failure.to_error(filename)

        return self.blocks

    def render(self, open_marker: str = '```yaml', close_marker: str = '```') -> str:
        """Combine the resolved blocks into a single document.

        Each block is wrapped back into fence markers and sections are
        separated by blank lines, so the result can be fed to the test
        runner as a standalone file.

        Args:
            open_marker: Opening fence marker.
            close_marker: Closing fence marker.

        Returns:
            Combined document text.

        Raises:
            ResolutionError: If the resolution failed.
        """
        sections = (
            f'{open_marker}\n{block.content}\n{close_marker}'
            for block in self.unwrap()
        )

        return SECTION_SEPARATOR.join(sections) + '\n'
