"""CLI utilities for inspecting and preparing Resty documents.

The commands read a document from disk and delegate to the core
parser and resolver; the resolved document is printed to standard
output so that it can be piped into the test runner.
"""

from json import dumps
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

from click import ClickException, argument, echo, group, option, pass_context
from click import Path as PathParam

from resty_blocks.core import DocumentParser, validate_block, validate_filename
from resty_blocks.errors import ErrorKind, RestyError
from resty_blocks.schema import Failure
from resty_blocks.settings import ParserSettings

if TYPE_CHECKING:
    from click import Context

if TYPE_CHECKING:
    from resty_blocks.schema import Block


InputFilepath = PathParam(
    dir_okay=False,
    exists=True,
    readable=True,
    path_type=Path,
)


def _dump_blocks(*blocks: 'Block') -> str:
    return dumps(
        [block.model_dump(mode='json', exclude={'content'}) for block in blocks],
        ensure_ascii=False,
        indent=4,
    )


def _read(ctx: 'Context', document: Path) -> str:
    """Read a document after checking its extension.

    Raises:
        ClickException: If the file is not a Resty document.
    """
    parser: DocumentParser = ctx.obj
    if failure := validate_filename(document.name, parser.settings.extensions):
        _fail(failure)

    return document.read_text(encoding='utf-8')


def _fail(failure: 'Failure') -> NoReturn:
    raise ClickException(failure.message)


@group(help='Command-line utilities for Resty documents.')
@option(
    '--strict/--relaxed',
    default=None,
    help='Reject duplicate test names and malformed requirements.',
)
@pass_context
def cli(ctx: 'Context', strict: bool | None) -> None:
    """Root CLI group for resty-blocks tools."""
    settings = ParserSettings()
    if strict is not None:
        settings = settings.model_copy(update={'strict': strict})

    ctx.obj = DocumentParser(settings=settings)


@cli.command(
    name='blocks',
    help='Print metadata of the blocks of a document as JSON.',
)
@option('-a', '--all', 'show_all', is_flag=True, help='Include invalid blocks.')
@argument('document', type=InputFilepath)
@pass_context
def list_blocks(ctx: 'Context', document: Path, show_all: bool) -> None:
    """List blocks of a document."""
    parser: DocumentParser = ctx.obj
    text = _read(ctx, document)

    try:
        blocks = parser.find_all_blocks(text, valid_only=not show_all)

    except RestyError as error:
        raise ClickException(str(error)) from error

    echo(_dump_blocks(*blocks))


@cli.command(
    name='at',
    help='Print metadata of the test block under a zero-based line.',
)
@argument('document', type=InputFilepath)
@argument('line', type=int)
@pass_context
def block_at(ctx: 'Context', document: Path, line: int) -> None:
    """Show the runnable test block under a cursor line."""
    parser: DocumentParser = ctx.obj
    try:
        block = parser.find_block(_read(ctx, document), line)

    except RestyError as error:
        raise ClickException(str(error)) from error

    if block is None:
        _fail(Failure(kind=ErrorKind.NO_BLOCK))

    if failure := validate_block(block):
        _fail(failure)

    echo(_dump_blocks(block))


@cli.command(
    name='resolve',
    help='Print a standalone document running a test with its dependencies.',
)
@argument('document', type=InputFilepath)
@argument('test')
@pass_context
def resolve_test(ctx: 'Context', document: Path, test: str) -> None:
    """Resolve the execution order for a test."""
    parser: DocumentParser = ctx.obj

    try:
        resolution = parser.resolve(_read(ctx, document), test)
        resolution.unwrap(document.as_posix())

    except RestyError as error:
        raise ClickException(str(error)) from error

    echo(resolution.render(parser.open_marker, parser.close_marker), nl=False)


@cli.command(
    name='check',
    help='Validate dependencies of all tests of a document.',
)
@argument('document', type=InputFilepath)
@pass_context
def check_document(ctx: 'Context', document: Path) -> None:
    """Validate a document."""
    parser: DocumentParser = ctx.obj
    text = _read(ctx, document)

    try:
        resolver = parser.resolver(text)

    except RestyError as error:
        raise ClickException(str(error)) from error

    if failure := resolver.validate_all():
        _fail(failure)

    echo(f'{document.name}: {parser.count_tests(text)} tests, {len(resolver.graph)} resolvable')


if __name__ == '__main__':
    cli()
