"""Command-line interface modules."""

from .convert import main as convert_main

__all__ = ["convert_main"]
