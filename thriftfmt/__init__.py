"""thriftfmt: a formatter for Apache Thrift IDL files."""

from thriftfmt.diagnostics import Diagnostic, ThriftParseError
from thriftfmt.format import FormatOptions, PureThriftFormatter, ThriftFormatter
from thriftfmt.parser import parse, parse_result
from thriftfmt.pipeline import FormatRunResult, ThriftParseResult, format_text, run_format

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "FormatOptions",
    "FormatRunResult",
    "PureThriftFormatter",
    "ThriftFormatter",
    "ThriftParseError",
    "ThriftParseResult",
    "__version__",
    "format_text",
    "parse",
    "parse_result",
    "run_format",
]
