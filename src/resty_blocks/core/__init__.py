"""Block extraction and dependency resolution engine.

This module defines the core infrastructure for turning a Resty document
into an executable ordered list of blocks.

It provides:
- line-oriented scanning of fenced regions;
- classification of block contents into tests, variables and includes;
- dependency graphs with cycle detection;
- composition of execution orders for standalone test runs.

The primary public entry point is `DocumentParser`, which scans and
classifies blocks, and hands them to a `DependencyResolver`.
"""

from .classifier import classify
from .graph import DependencyGraph
from .parser import DocumentParser
from .resolver import DependencyResolver
from .scanner import find_span, scan_spans
from .validation import is_resty_file, validate_block, validate_filename

__all__ = (
    'DependencyGraph',
    'DependencyResolver',
    'DocumentParser',
    'classify',
    'find_span',
    'is_resty_file',
    'scan_spans',
    'validate_block',
    'validate_filename',
)
