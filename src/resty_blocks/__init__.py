"""Block extraction and dependency resolution for Resty documents.

The `resty_blocks` package reads plain-text `.resty` / `.rest` documents
with fenced YAML blocks and prepares them for an external test runner.

Key features:
- line-oriented scanning of fenced blocks, by cursor or for a whole file;
- classification of blocks into tests, variable sets and includes;
- dependency graphs over `requires` lists with cycle detection;
- composition of the minimal ordered set of blocks needed to run
  a single test standalone.

The package performs no I/O and never runs the test runner itself.
"""
