"""
Reporting layer for channel-mix: CSV export and currency formatting.
"""

from channel_mix.reporting.export import (
    format_currency,
    format_roas,
    round_half_up,
    export_frame,
    to_csv,
    write_csv,
    read_csv,
)

__all__ = [
    "format_currency",
    "format_roas",
    "round_half_up",
    "export_frame",
    "to_csv",
    "write_csv",
    "read_csv",
]
