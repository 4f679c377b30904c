"""Utilities - generated upload fixtures."""

from .files import TestFile, cleanup_directory, create_file, is_file_available

__all__ = ["TestFile", "create_file", "cleanup_directory", "is_file_available"]
