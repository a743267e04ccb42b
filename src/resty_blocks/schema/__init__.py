"""Data models exchanged between the scanner, the resolver and callers.

Defines immutable Pydantic models for classified blocks and for the
outcomes of validation and dependency resolution.
"""

from .blocks import AMBIENT_TYPES, Block, BlockType, Span
from .results import Failure, Resolution

__all__ = (
    'AMBIENT_TYPES',
    'Block',
    'BlockType',
    'Failure',
    'Resolution',
    'Span',
)
