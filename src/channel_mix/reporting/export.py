"""
CSV export and currency formatting for allocation results.

The export layout is::

    Channel,Spend,Revenue,ROAS
    Paid Social,52000,98114,1.89
    ...

    TOTAL,250000,612345,2.45

Spend and revenue are rounded half-up to whole currency units; ROAS
carries two decimals.  The TOTAL row reports blended ROAS.
"""

from __future__ import annotations

import io
import math
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd
from loguru import logger

if TYPE_CHECKING:
    from channel_mix.optimization.allocator import AllocationResult


CSV_COLUMNS = ["Channel", "Spend", "Revenue", "ROAS"]
TOTAL_LABEL = "TOTAL"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def format_currency(value: float, symbol: str = "$") -> str:
    """
    Format an amount as symbol + thousands-grouped whole number.

    Example:
        >>> format_currency(1234567.6, "€")
        '€1,234,568'
    """
    amount = round_half_up(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,}"


def format_roas(value: float) -> str:
    return f"{value:.2f}"


def export_frame(result: AllocationResult) -> pd.DataFrame:
    """Result rows in export layout (without the TOTAL row)."""
    records = [
        {
            "Channel": row.name,
            "Spend": round_half_up(row.spend),
            "Revenue": round_half_up(row.revenue),
            "ROAS": format_roas(row.roas),
        }
        for row in result.rows
    ]
    return pd.DataFrame(records, columns=CSV_COLUMNS)


def to_csv(result: AllocationResult) -> str:
    """Render a result as CSV text."""
    body = export_frame(result).to_csv(index=False, lineterminator="\n")

    total = pd.DataFrame([{
        "Channel": TOTAL_LABEL,
        "Spend": round_half_up(result.totals.spend),
        "Revenue": round_half_up(result.totals.revenue),
        "ROAS": format_roas(result.blended_roas),
    }], columns=CSV_COLUMNS)
    total_line = total.to_csv(index=False, header=False, lineterminator="\n")

    return body + "\n" + total_line


def write_csv(result: AllocationResult, path: Path | str) -> Path:
    """Write the CSV export to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv(result))
    logger.info(f"Wrote allocation export to {path}")
    return path


def read_csv(source: str | Path) -> tuple[pd.DataFrame, pd.Series | None]:
    """
    Parse an export back into channel rows and the TOTAL row.

    Args:
        source: A ``Path`` to an export file, or the CSV text itself

    Returns:
        ``(rows, total)`` where ``total`` is None if the file has no TOTAL row
    """
    if isinstance(source, Path):
        df = pd.read_csv(source)
    else:
        df = pd.read_csv(io.StringIO(source))

    is_total = df["Channel"] == TOTAL_LABEL
    rows = df[~is_total].reset_index(drop=True)
    total = df[is_total].iloc[0] if is_total.any() else None
    return rows, total
