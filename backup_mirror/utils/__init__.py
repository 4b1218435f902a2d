"""Utility modules for backup mirroring."""

from .formatters import format_file_size, format_duration

__all__ = ["format_file_size", "format_duration"]
