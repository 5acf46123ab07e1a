"""Output formatters for movcheck."""

from .default import format_default, format_summary
from .json import format_json, format_json_list, to_dict
from .quiet import format_quiet, format_quiet_list

__all__ = [
    "format_default",
    "format_summary",
    "format_json",
    "format_json_list",
    "format_quiet",
    "format_quiet_list",
    "to_dict",
]
