"""CSV export of account reports."""
import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from fastapi.responses import Response

# Column order of each report, as written to the CSV header.
REPORT_COLUMNS: dict[str, tuple[str, ...]] = {
    "stats": ("followed_by", "follows", "media", "er", "created_at"),
    "media-tags": ("name", "occurs"),
    "media-accounts": ("username", "occurs"),
}


def export_filename(username: str, report: str, today: date) -> str:
    return f"{username.lower()}_{report}_{today.isoformat()}.csv"


def _cell(row: Mapping[str, Any] | object, column: str) -> Any:
    value = row.get(column, "") if isinstance(row, Mapping) else getattr(row, column, "")
    if hasattr(value, "strftime"):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value


def render_csv(rows: Iterable[Mapping[str, Any] | object], columns: Iterable[str]) -> str:
    """Render rows (mappings or objects) with a header in the given column order."""
    columns = list(columns)
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({column: _cell(row, column) for column in columns})
    return buf.getvalue()


def csv_response(
    rows: Iterable[Mapping[str, Any] | object], report: str, username: str, today: date
) -> Response:
    filename = export_filename(username, report, today)
    return Response(
        content=render_csv(rows, REPORT_COLUMNS[report]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
