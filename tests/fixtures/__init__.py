"""
Shared test fixtures for mockup-kit.
"""
