"""Tests for resolution results and error formatting."""

import pydantic
import pytest

from resty_blocks.errors import ErrorKind, ResolutionError, RestyError
from resty_blocks.schema import Failure, Resolution
from tests.examples.blocks import make_ambient, make_test


@pytest.mark.parametrize('failure, expected', (
    pytest.param(
        Failure(kind=ErrorKind.NOT_FOUND, name='ping'),
        "Test 'ping' not found in file",
        id='not found',
    ),
    pytest.param(
        Failure(kind=ErrorKind.MISSING_DEPENDENCY, name='login', required_by='profile'),
        "Test 'profile' requires 'login' which does not exist",
        id='missing dependency',
    ),
    pytest.param(
        Failure(kind=ErrorKind.MISSING_DEPENDENCY, name='login'),
        "Required test 'login' not found",
        id='missing dependency without parent',
    ),
    pytest.param(
        Failure(kind=ErrorKind.CIRCULAR_DEPENDENCY, cycle=('a', 'b', 'a')),
        'Circular dependency detected: a → b → a',
        id='circular dependency',
    ),
    pytest.param(
        Failure(kind=ErrorKind.NO_BLOCK),
        'Cursor is not in a YAML code block.',
        id='no block',
    ),
    pytest.param(
        Failure(kind=ErrorKind.INVALID_FILE, name='notes.md'),
        "File 'notes.md' is not a Resty document.",
        id='invalid file',
    ),
    pytest.param(
        Failure(kind=ErrorKind.PARSE_FAILURE),
        'Block content is not a YAML mapping.',
        id='parse failure',
    ),
))
def test_failure_message(failure: Failure, expected: str) -> None:
    """Describe failures in a single line."""
    assert failure.message == expected


def test_resolution_unwrap() -> None:
    """Return blocks of a successful resolution."""
    blocks = (make_ambient(), make_test('ping'))
    resolution = Resolution(target='ping', blocks=blocks)

    assert resolution.ok
    assert resolution.unwrap() == blocks
    assert resolution.contents == ('variables: 0', 'test: ping\nget: /ping')


def test_resolution_unwrap_failure() -> None:
    """Raise the failure of a failed resolution."""
    resolution = Resolution.fail('a', ErrorKind.CIRCULAR_DEPENDENCY, name='a', cycle=('a', 'a'))

    with pytest.raises(ResolutionError, match=r'Circular dependency detected: a → a') as error:
        resolution.unwrap('api.resty')

    assert isinstance(error.value, RestyError)
    assert error.value.kind == ErrorKind.CIRCULAR_DEPENDENCY
    assert 'in "api.resty"' in str(error.value)
    assert "on test 'a'" in str(error.value)
    assert 'cycle a → a' in str(error.value)


def test_resolution_rejects_partial_result() -> None:
    """Forbid failures carrying blocks."""
    with pytest.raises(pydantic.ValidationError, match=r'Failed resolution can not carry blocks'):
        Resolution(
            target='a',
            blocks=(make_test('a'),),
            failure=Failure(kind=ErrorKind.NOT_FOUND, name='a'),
        )


def test_resolution_is_immutable() -> None:
    """Forbid changes of results."""
    resolution = Resolution(target='a', blocks=(make_test('a'),))

    with pytest.raises(pydantic.ValidationError):
        resolution.target = 'b'  # type: ignore[misc]


def test_resolution_render() -> None:
    """Combine blocks into a fenced standalone document."""
    resolution = Resolution(target='ping', blocks=(make_ambient(), make_test('ping')))

    assert resolution.render() == (
        '```yaml\n'
        'variables: 0\n'
        '```\n'
        '\n'
        '```yaml\n'
        'test: ping\n'
        'get: /ping\n'
        '```\n'
    )


def test_resolution_render_failure() -> None:
    """Refuse to render failed resolutions."""
    resolution = Resolution.fail('ping', ErrorKind.NOT_FOUND, name='ping')

    with pytest.raises(ResolutionError, match=r"Test 'ping' not found in file"):
        resolution.render()


def test_error_without_context() -> None:
    """Format errors without context as the bare message."""
    assert str(RestyError('Plain message')) == 'Plain message'
