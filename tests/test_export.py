"""Tests for CSV report rendering."""
import csv
import io
from datetime import date, datetime
from types import SimpleNamespace

from account_monitor.services import export_service


def _parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_filename_uses_lowercase_username_and_date():
    name = export_service.export_filename("Some_Account", "media-tags", date(2024, 6, 15))
    assert name == "some_account_media-tags_2024-06-15.csv"


def test_stats_columns_follow_report_order():
    rows = [
        SimpleNamespace(
            id="ignored", followed_by=150, follows=11, media=8, er=2.5,
            created_at=datetime(2024, 6, 14, 12, 0, 5),
        ),
    ]
    text = export_service.render_csv(rows, export_service.REPORT_COLUMNS["stats"])
    assert _parse(text) == [
        ["followed_by", "follows", "media", "er", "created_at"],
        ["150", "11", "8", "2.5", "2024-06-14 12:00:05"],
    ]


def test_mapping_rows_drop_unlisted_keys():
    rows = [{"id": 1, "name": "travel", "occurs": 4}, {"id": 2, "name": "food", "occurs": 1}]
    text = export_service.render_csv(rows, export_service.REPORT_COLUMNS["media-tags"])
    assert _parse(text) == [["name", "occurs"], ["travel", "4"], ["food", "1"]]


def test_empty_report_has_header_only():
    text = export_service.render_csv([], export_service.REPORT_COLUMNS["media-accounts"])
    assert _parse(text) == [["username", "occurs"]]


def test_csv_response_headers():
    response = export_service.csv_response([], "stats", "Demo", date(2024, 1, 2))
    assert response.media_type == "text/csv"
    assert response.headers["content-disposition"] == 'attachment; filename="demo_stats_2024-01-02.csv"'
