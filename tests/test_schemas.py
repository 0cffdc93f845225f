"""Schema tests."""
import uuid
from datetime import datetime

from account_monitor.schemas.common import APIResponse, PaginationMeta, ErrorDetail
from account_monitor.schemas.stats import DiffRecord, StatsValues


def test_api_response_success():
    resp = APIResponse(status="success", data={"id": "123"}, message="OK")
    assert resp.status == "success"
    assert resp.data == {"id": "123"}


def test_api_response_with_pagination():
    pagination = PaginationMeta(total=100, page=1, per_page=50, has_next=True)
    resp = APIResponse(status="success", data=[], pagination=pagination)
    assert resp.pagination is not None
    assert resp.pagination.total == 100
    assert resp.pagination.has_next is True


def test_error_detail():
    err = ErrorDetail(title="Not Found", status=404, detail="Account not found")
    assert err.type == "about:blank"
    assert err.status == 404


def test_stats_values_minus():
    newer = StatsValues(followed_by=150, follows=11, media=8, er=2.5)
    older = StatsValues(followed_by=100, follows=12, media=5, er=1.5)
    delta = newer.minus(older)
    assert delta == StatsValues(followed_by=50, follows=-1, media=3, er=1.0)


def test_diff_record_is_zero():
    values = StatsValues(followed_by=10, follows=1, media=1, er=0.5)
    snapshot_id = uuid.uuid4()
    record = DiffRecord(
        account_id=uuid.uuid4(),
        granularity="daily",
        from_snapshot_id=snapshot_id,
        to_snapshot_id=snapshot_id,
        period_start=datetime(2024, 6, 1),
        period_end=datetime(2024, 6, 1),
        from_values=values,
        to_values=values,
        delta=values.minus(values),
    )
    assert record.is_zero
    assert record.model_dump(mode="json")["granularity"] == "daily"
