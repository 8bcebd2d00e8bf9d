"""Utility functions for staging-deploy"""

from .file_utils import (
    copy_file,
    list_relative_files,
    read_json,
    write_json,
    format_size,
)

__all__ = [
    "copy_file",
    "list_relative_files",
    "read_json",
    "write_json",
    "format_size",
]
