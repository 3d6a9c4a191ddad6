"""Resolve AWS secret references from the environment and launch a program with them."""

__version__ = "0.1.0"
