from gocyclo.reporting.formatters import (
    average,
    format_average,
    format_json,
    sort_records,
    write_records,
    write_report,
)

__all__ = [
    "average",
    "format_average",
    "format_json",
    "sort_records",
    "write_records",
    "write_report",
]
