"""
Property-based testing suite for mockup-kit.

Uses Hypothesis to generate override mappings and dotted paths and check
that the builder's resolution rules hold for all of them.
"""
