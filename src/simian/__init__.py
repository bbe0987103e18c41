"""Simian: tree-walking evaluator for a small dynamically-typed scripting language."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
