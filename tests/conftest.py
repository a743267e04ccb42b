"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest
import yaml

from resty_blocks.core import DocumentParser
from resty_blocks.settings import ParserSettings

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop `RESTY_*` variables leaking from the host environment."""
    for name in ('LANGUAGE', 'FENCE', 'HTTP_METHODS', 'EXTENSIONS', 'STRICT'):
        monkeypatch.delenv(f'RESTY_{name}', raising=False)


@pytest.fixture
def loader() -> type[yaml.SafeLoader]:
    """Provide an isolated YAML SafeLoader class for tests.

    Creates a dedicated subclass of `yaml.SafeLoader` so that
    constructors registered during a test do not leak into other
    tests or affect global loader state.

    Returns:
        A subclass of `yaml.SafeLoader` suitable for block parsing.
    """
    class Loader(yaml.SafeLoader):
        pass

    return Loader


@pytest.fixture
def parser(loader: type[yaml.SafeLoader]) -> DocumentParser:
    """Provide a document parser with default settings."""
    return DocumentParser(loader, settings=ParserSettings())


@pytest.fixture
def write_document(tmp_path: 'Path') -> 'Callable[..., Path]':
    """Provide a factory writing documents into a temporary directory."""
    def write(content: str, name: str = 'api.resty') -> 'Path':
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return path

    return write
