"""Test suite for regulon-pruner.

Test organization:
- fixtures/: Mock regulatory tables and expression matrices
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/ -v --tb=short
"""
