"""Thrift formatter: patch passes, render engine, alignment and comments."""

from thriftfmt.format.align import AlignmentPadding, assign_column_levels, calculate_padding
from thriftfmt.format.formatter import ThriftFormatter
from thriftfmt.format.options import DEFAULT_INDENT, FormatOptions
from thriftfmt.format.patch import (
    patch,
    patch_field_requiredness,
    patch_list_separators,
    patch_remove_last_list_separator,
)
from thriftfmt.format.pure import PureThriftFormatter
from thriftfmt.format.runner import format_text, run_format
from thriftfmt.format.walk import walk

__all__ = [
    "DEFAULT_INDENT",
    "AlignmentPadding",
    "FormatOptions",
    "PureThriftFormatter",
    "ThriftFormatter",
    "assign_column_levels",
    "calculate_padding",
    "format_text",
    "patch",
    "patch_field_requiredness",
    "patch_list_separators",
    "patch_remove_last_list_separator",
    "run_format",
    "walk",
]
