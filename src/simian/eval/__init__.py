"""Evaluator helper modules for the Simian runtime."""

__all__ = [
    "blocks",
    "common",
    "expr",
    "fn",
    "helpers",
    "objects",
]
