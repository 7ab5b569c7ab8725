"""CSV export of the merged movement history."""

from __future__ import annotations

import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from .ledger_service import Movement

HEADERS = ["kind", "id", "occurred_on", "amount", "description", "category", "user_name"]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def export_movements_csv(*, movements: Iterable[Movement], output_path: Path) -> Path:
    """Write movements to CSV at `output_path`.

    Columns are deterministic: kind, id, occurred_on, amount, description,
    category, user_name. ``category`` holds the income source for incomes and
    ``amount`` is always positive; ``kind`` tells the two apart.
    Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for movement in movements:
            record = movement.record
            writer.writerow(
                {
                    "kind": movement.kind.value,
                    "id": _serialize_value(record.id),
                    "occurred_on": _serialize_value(record.occurred_on),
                    "amount": _serialize_value(record.amount),
                    "description": _serialize_value(record.description),
                    "category": _serialize_value(movement.bucket),
                    "user_name": _serialize_value(record.user_name),
                }
            )

    return output_path
