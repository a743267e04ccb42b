"""Validation of blocks and documents selected for a run."""

from pathlib import PurePath
from typing import TYPE_CHECKING

from resty_blocks.errors import ErrorKind
from resty_blocks.schema import Failure
from resty_blocks.settings import EXTENSIONS

if TYPE_CHECKING:
    from collections.abc import Collection

if TYPE_CHECKING:
    from resty_blocks.schema import Block


def validate_block(block: 'Block | None') -> Failure | None:
    """Check that a block found under the cursor is a runnable test.

    Args:
        block: Block returned by a point query, if any.

    Returns:
        A `NO_BLOCK`, `NOT_TEST_BLOCK` or `INVALID_TEST` failure,
        or `None` if the block can be run.
    """
    if block is None:
        return Failure(kind=ErrorKind.NO_BLOCK)

    if not block.has_test_key:
        return Failure(kind=ErrorKind.NOT_TEST_BLOCK)

    if not block.is_valid:
        return Failure(kind=ErrorKind.INVALID_TEST, name=block.test_name)

    return None


def is_resty_file(filename: str, extensions: 'Collection[str]' = EXTENSIONS) -> bool:
    """Check whether a file name has a Resty document extension."""
    return PurePath(filename).suffix in extensions


def validate_filename(filename: str, extensions: 'Collection[str]' = EXTENSIONS) -> Failure | None:
    """Check that a file is a Resty document.

    Args:
        filename: File name or path.
        extensions: Accepted file name suffixes.

    Returns:
        An `INVALID_FILE` failure, or `None`.
    """
    if is_resty_file(filename, extensions):
        return None

    return Failure(kind=ErrorKind.INVALID_FILE, name=PurePath(filename).name)
