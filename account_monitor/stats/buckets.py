"""Calendar bucket SQL expressions, compiled per dialect.

Days and months are cut in UTC. PostgreSQL truncates the timestamp with
``date_trunc`` after shifting it to UTC, so the session ``TimeZone`` does not
matter; SQLite stores UTC and formats it with ``strftime``. Both yield one
distinct value per calendar day or month, which is all the window functions
partitioning on them need.
"""
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement


class day_bucket(FunctionElement):
    inherit_cache = True
    name = "day_bucket"


class month_bucket(FunctionElement):
    inherit_cache = True
    name = "month_bucket"


@compiles(day_bucket)
def _compile_day_bucket(element, compiler, **kw):
    return "date_trunc('day', (%s) AT TIME ZONE 'UTC')" % compiler.process(element.clauses, **kw)


@compiles(month_bucket)
def _compile_month_bucket(element, compiler, **kw):
    return "date_trunc('month', (%s) AT TIME ZONE 'UTC')" % compiler.process(element.clauses, **kw)


@compiles(day_bucket, "sqlite")
def _compile_day_bucket_sqlite(element, compiler, **kw):
    return "strftime('%%Y-%%m-%%d', %s)" % compiler.process(element.clauses, **kw)


@compiles(month_bucket, "sqlite")
def _compile_month_bucket_sqlite(element, compiler, **kw):
    return "strftime('%%Y-%%m', %s)" % compiler.process(element.clauses, **kw)
