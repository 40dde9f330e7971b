"""Helpers for interpreting Go toolchain output and managing go.sum."""

__version__ = "0.1.0"
