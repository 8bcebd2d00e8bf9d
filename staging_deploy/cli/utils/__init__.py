"""CLI utility functions"""

from .output import (
    console,
    format_module_results,
    format_remote_result,
    format_status,
    format_error,
    format_json,
)

__all__ = [
    'console',
    'format_module_results',
    'format_remote_result',
    'format_status',
    'format_error',
    'format_json',
]
