"""ORM model definition tests."""
from account_monitor.models import (
    STATS_METRICS,
    AccountStats,
    Base,
    UserRole,
)


def test_all_tables_registered():
    table_names = set(Base.metadata.tables.keys())
    expected = {
        "users", "accounts", "account_stats", "account_notes",
        "media", "tags", "media_tags", "media_accounts",
        "categories", "account_categories",
    }
    assert expected == table_names


def test_user_role_enum():
    assert UserRole.ADMIN.value == "admin"
    assert UserRole.MANAGER.value == "manager"
    assert UserRole.VIEWER.value == "viewer"


def test_stats_metrics_are_columns():
    columns = set(AccountStats.__table__.columns.keys())
    assert set(STATS_METRICS) <= columns
    assert {"account_id", "created_at"} <= columns


def test_dependent_rows_cascade_on_account_delete():
    for table in ("account_stats", "account_notes", "media", "media_accounts", "account_categories"):
        fks = [fk for fk in Base.metadata.tables[table].foreign_keys if fk.column.table.name == "accounts"]
        assert fks, table
        assert all(fk.ondelete == "CASCADE" for fk in fks), table


def test_unique_constraints():
    def unique_sets(table):
        return {
            tuple(sorted(c.name for c in constraint.columns))
            for constraint in Base.metadata.tables[table].constraints
            if constraint.__class__.__name__ == "UniqueConstraint"
        }

    assert ("account_id", "user_id") in unique_sets("account_notes")
    assert ("name", "user_id") in unique_sets("categories")
    assert ("account_id", "category_id") in unique_sets("account_categories")
