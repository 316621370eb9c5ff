import csv
from decimal import Decimal
from typing import Iterable, TextIO

from models import ClientSummary

OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


def format_decimal(value: Decimal) -> str:
    """Format decimal in plain notation, removing trailing zeros."""
    normalized = value.normalize()
    return f"{normalized:f}"


def write_summaries(summaries: Iterable[ClientSummary], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for summary in summaries:
        writer.writerow([
            summary.client_id,
            format_decimal(summary.available),
            format_decimal(summary.held),
            format_decimal(summary.total),
            str(summary.locked).lower(),
        ])
