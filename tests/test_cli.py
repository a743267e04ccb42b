"""Tests for the command-line interface."""

from json import loads
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from resty_blocks.__main__ import cli
from tests.examples import documents

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def runner() -> CliRunner:
    """Provide a click test runner."""
    return CliRunner()


def test_blocks(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Print metadata of valid blocks."""
    path = write_document(documents.MIXED)

    result = runner.invoke(cli, ['blocks', str(path)])

    assert result.exit_code == 0, result.output
    assert [item['test_name'] for item in loads(result.output)] == [None, 'health']
    assert 'content' not in loads(result.output)[0]


def test_blocks_all(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Print metadata of all blocks."""
    path = write_document(documents.MIXED)

    result = runner.invoke(cli, ['blocks', '--all', str(path)])

    assert result.exit_code == 0, result.output
    assert [item['is_valid'] for item in loads(result.output)] == [False, False, True, True]


def test_at(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Print the test block under a line."""
    path = write_document(documents.PROFILE)

    result = runner.invoke(cli, ['at', str(path), '13'])

    assert result.exit_code == 0, result.output
    assert loads(result.output) == [{
        'start_line': 11,
        'end_line': 16,
        'block_type': 'test',
        'test_name': 'getProfile',
        'has_test_key': True,
        'is_valid': True,
        'requires': ['login'],
    }]


def test_at_not_a_test(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Fail on blocks which are not tests."""
    path = write_document(documents.PROFILE)

    result = runner.invoke(cli, ['at', str(path), '1'])

    assert result.exit_code == 1
    assert 'does not appear to be a Resty test block' in result.output


def test_resolve(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Print the combined document for a test."""
    path = write_document(documents.PROFILE)

    result = runner.invoke(cli, ['resolve', str(path), 'getProfile'])

    assert result.exit_code == 0, result.output
    assert result.output.count('```yaml') == 3
    assert result.output.index('variables:') < result.output.index('test: login')
    assert result.output.index('test: login') < result.output.index('test: getProfile')


@pytest.mark.parametrize('content, test, message', (
    pytest.param(documents.PROFILE, 'unknown', "Test 'unknown' not found in file", id='not found'),
    pytest.param(documents.CIRCULAR, 'a', 'Circular dependency detected: a → b → a', id='circular'),
))
def test_resolve_failure(runner: CliRunner, write_document: 'Callable[..., Path]',
                         content: str, test: str, message: str) -> None:
    """Exit with the failure message."""
    path = write_document(content)

    result = runner.invoke(cli, ['resolve', str(path), test])

    assert result.exit_code == 1
    assert message in result.output


def test_resolve_strict_duplicate(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Reject duplicated tests in strict mode."""
    path = write_document(documents.DUPLICATE)

    result = runner.invoke(cli, ['--strict', 'resolve', str(path), 'ping'])

    assert result.exit_code == 1
    assert "Test 'ping' is shadowing" in result.output


@pytest.mark.parametrize('command, extra', (
    pytest.param('blocks', (), id='blocks'),
    pytest.param('at', ('1',), id='at'),
))
def test_strict_malformed_requires(runner: CliRunner, write_document: 'Callable[..., Path]',
                                   command: str, extra: tuple[str, ...]) -> None:
    """Reject malformed requirements in strict mode."""
    path = write_document('```yaml\ntest: b\nrequires: {a: 1}\nget: /b\n```\n')

    result = runner.invoke(cli, ['--strict', command, str(path), *extra])

    assert result.exit_code == 1
    assert "Test 'b' has malformed requirements" in result.output


def test_invalid_file(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Refuse files without a Resty extension."""
    path = write_document(documents.PROFILE, name='notes.md')

    result = runner.invoke(cli, ['blocks', str(path)])

    assert result.exit_code == 1
    assert "File 'notes.md' is not a Resty document." in result.output


def test_check(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Summarize a valid document."""
    path = write_document(documents.CHECKOUT, name='shop.rest')

    result = runner.invoke(cli, ['check', str(path)])

    assert result.exit_code == 0, result.output
    assert result.output == 'shop.rest: 3 tests, 3 resolvable\n'


def test_check_circular(runner: CliRunner, write_document: 'Callable[..., Path]') -> None:
    """Report cycles of a document."""
    path = write_document(documents.CIRCULAR)

    result = runner.invoke(cli, ['check', str(path)])

    assert result.exit_code == 1
    assert 'Circular dependency detected' in result.output
