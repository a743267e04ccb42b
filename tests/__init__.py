"""Test suite for the resty-blocks package.

This package contains unit and integration tests validating
block scanning and classification, dependency graphs, execution
order resolution, and the command-line interface.
"""
