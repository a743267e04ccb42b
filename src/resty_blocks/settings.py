"""Runtime settings for document parsing.

Settings are read from `RESTY_*` environment variables. List values
(`RESTY_HTTP_METHODS`, `RESTY_EXTENSIONS`) are given as JSON arrays.
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from resty_blocks.models import SettingsModel

#: HTTP verbs that make a test block executable.
HTTP_METHODS = ('get', 'post', 'put', 'patch', 'delete', 'head', 'options')

#: File extensions recognized as Resty documents.
EXTENSIONS = ('.resty', '.rest')


class ParserSettings(SettingsModel):
    """Settings controlling block scanning and classification."""

    model_config = SettingsConfigDict(
        env_prefix='RESTY_',
        frozen=True,
        extra='ignore',
    )

    language: str = Field(
        default='yaml',
        min_length=1,
        title='Fence language',
        description='Language tag following the opening fence marker.',
    )

    fence: str = Field(
        default='```',
        min_length=1,
        title='Fence marker',
        description='Bare marker opening and closing a block.',
    )

    http_methods: tuple[str, ...] = Field(
        default=HTTP_METHODS,
        min_length=1,
        title='HTTP methods',
        description='Keys of which at least one makes a test block valid.',
    )

    extensions: tuple[str, ...] = Field(
        default=EXTENSIONS,
        title='Document extensions',
        description='File name suffixes of Resty documents.',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description=(
            'Raise on document issues such as duplicate test names '
            'instead of emitting warnings.'
        ),
    )

    @property
    def open_marker(self) -> str:
        """Opening fence marker tagged with the language."""
        return f'{self.fence}{self.language}'

    @property
    def close_marker(self) -> str:
        """Closing fence marker."""
        return self.fence
