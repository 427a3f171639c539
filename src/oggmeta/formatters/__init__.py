"""Output formatters for oggmeta."""

from .default import format_default
from .json import format_json, format_json_list, format_records_json, to_dict
from .quiet import format_quiet, format_quiet_list

__all__ = [
    "format_default",
    "format_json",
    "format_json_list",
    "format_records_json",
    "format_quiet",
    "format_quiet_list",
    "to_dict",
]
