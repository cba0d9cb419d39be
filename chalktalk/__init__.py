"""Chalktalk - American football play diagram editor."""

__version__ = "0.1.0"
