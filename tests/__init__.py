"""
Test package for mockup-kit.

Unit tests for each layer of the builder plus Hypothesis-driven property
tests for override resolution and the default value table.
"""

__all__ = [
    "conftest",  # Pytest configuration and fixtures
    "fixtures",  # Sample types to build
    "property",  # Property-based test suite
    "unit",  # Unit test suite
]
