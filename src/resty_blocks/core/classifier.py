"""Classification of block contents.

The interior of every span is parsed as YAML and sorted into one of
the block types by its distinguishing key. Parse failures never
propagate: they produce an invalid block so that one malformed block
does not affect its siblings.
"""

from datetime import date
from typing import TYPE_CHECKING, Any
from warnings import warn

from yaml import SafeLoader, load
from yaml.error import YAMLError

from resty_blocks.errors import DocumentError, ErrorContext, MalformedRequiresWarning
from resty_blocks.schema import Block, BlockType
from resty_blocks.settings import HTTP_METHODS

if TYPE_CHECKING:
    from collections.abc import Collection

if TYPE_CHECKING:
    from yaml import BaseLoader

INCLUDE_KEY = 'include'
VARIABLES_KEY = 'variables'
TEST_KEY = 'test'
REQUIRES_KEY = 'requires'

#: Scalar values usable as test names. Booleans are excluded.
SCALARS = (str, int, float, date)


def parse_mapping(content: str,
                  loader: type['BaseLoader'] = SafeLoader) -> dict[Any, Any] | None:
    """Parse block content as a YAML mapping.

    Args:
        content: Raw block interior.
        loader: YAML loader class.

    Returns:
        The parsed mapping, or `None` if the content is not valid YAML
        or is not a mapping.
    """
    try:
        data = load(content, Loader=loader)  # noqa: S506

    except YAMLError:
        return None

    if not isinstance(data, dict):
        return None

    return data


def _is_name(value: Any) -> bool:  # noqa: ANN401
    return isinstance(value, SCALARS) and not isinstance(value, bool)


def _as_name(value: Any) -> str | None:  # noqa: ANN401
    if not _is_name(value):
        return None

    return str(value)


def _as_requires(value: Any) -> tuple[str, ...] | None:  # noqa: ANN401
    """Normalize a `requires` value.

    Returns `None` when the value can not be read as a list of names.
    """
    if value is None:
        return ()

    if isinstance(value, str):
        return (value,)

    if isinstance(value, list) and all(_is_name(item) for item in value):
        return tuple(str(item) for item in value)

    return None


def _emit_malformed_requires(test_name: str | None, line: int, *,
                            strict: bool) -> None:
    message = f'Test {test_name!r} has malformed requirements, expected a list of names'
    if strict:
        raise DocumentError(message, context=ErrorContext(
            line_num=line,
            test_name=test_name,
        ))

    warn(message, category=MalformedRequiresWarning, stacklevel=3)


def classify(content: str, start_line: int, end_line: int, *,
             loader: type['BaseLoader'] = SafeLoader,
             http_methods: 'Collection[str]' = HTTP_METHODS,
             strict: bool = False) -> Block:
    """Classify a block interior.

    Structural keys take precedence: a mapping with an `include` key is
    an include block and one with a `variables` key is a variables block,
    even when a `test` key is present too. Everything else is a test
    block, valid only with a `test` key and at least one HTTP method key.

    A `requires` value that can not be read as a list of names is
    dropped with a `MalformedRequiresWarning`, or rejected in strict mode.

    Args:
        content: Raw block interior.
        start_line: Line of the opening marker.
        end_line: Line of the closing marker.
        loader: YAML loader class.
        http_methods: Keys of which at least one makes a test executable.
        strict: Whether to raise on a malformed `requires` value.

    Returns:
        Classified block.

    Raises:
        DocumentError: On a malformed `requires` value in strict mode.
    """
    data = parse_mapping(content, loader)
    if data is None:
        return Block(
            start_line=start_line,
            end_line=end_line,
            content=content,
        )

    has_test_key = TEST_KEY in data

    if INCLUDE_KEY in data or VARIABLES_KEY in data:
        return Block(
            start_line=start_line,
            end_line=end_line,
            content=content,
            block_type=BlockType.INCLUDE if INCLUDE_KEY in data else BlockType.VARIABLES,
            has_test_key=has_test_key,
            is_valid=True,
        )

    test_name = _as_name(data.get(TEST_KEY))

    requires = _as_requires(data.get(REQUIRES_KEY))
    if requires is None:
        _emit_malformed_requires(test_name, start_line, strict=strict)

    return Block(
        start_line=start_line,
        end_line=end_line,
        content=content,
        block_type=BlockType.TEST,
        test_name=test_name,
        has_test_key=has_test_key,
        is_valid=has_test_key and any(method in data for method in http_methods),
        requires=requires or (),
    )
