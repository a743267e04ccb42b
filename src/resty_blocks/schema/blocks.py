"""Block model for fenced document regions.

A block is a unit of structured content extracted from a document.
Blocks are produced by the classifier and consumed read-only by the
dependency graph and the resolver.
"""

from enum import StrEnum
from typing import Self

from pydantic import Field, model_validator

from resty_blocks.models import SchemaModel


class BlockType(StrEnum):
    """Kind of a block, determined by its distinguishing key."""

    TEST = 'test'
    VARIABLES = 'variables'
    INCLUDE = 'include'


#: Block types included positionally rather than by `requires`.
AMBIENT_TYPES = frozenset({BlockType.VARIABLES, BlockType.INCLUDE})


class Span(SchemaModel):
    """Line range of a fenced region.

    `start_line` is the line of the opening marker and `end_line`
    is the line of the closing marker, both 0-based.
    """

    start_line: int = Field(ge=0)
    end_line: int = Field(ge=1)

    @model_validator(mode='after')
    def _check_order(self) -> Self:
        if self.start_line >= self.end_line:
            raise ValueError('Span must end after it starts')
        return self

    def interior(self, lines: list[str]) -> str:
        """Return the raw text between the markers.

        Args:
            lines: Document lines the span was found in.

        Returns:
            Interior lines joined with newlines.
        """
        return '\n'.join(lines[self.start_line + 1:self.end_line])


class Block(Span):
    """Classified block of a document."""

    content: str = Field(
        title='Content',
        description='Raw, unparsed text of the block interior.',
    )

    block_type: BlockType = Field(
        default=BlockType.TEST,
        title='Block type',
    )

    test_name: str | None = Field(
        default=None,
        title='Test name',
        description='Value of the `test` key; set for test blocks only.',
    )

    has_test_key: bool = Field(
        default=False,
        title='Has test key',
        description='Whether the parsed content contains a `test` key.',
    )

    is_valid: bool = Field(
        default=False,
        title='Validity',
    )

    requires: tuple[str, ...] = Field(
        default=(),
        title='Required tests',
        description='Ordered names of tests this test depends on.',
    )

    @property
    def is_ambient(self) -> bool:
        """Whether the block carries ambient configuration."""
        return self.block_type in AMBIENT_TYPES

    @property
    def is_named_test(self) -> bool:
        """Whether the block can be depended upon by name."""
        return self.block_type == BlockType.TEST and bool(self.test_name)
