"""
Fixed-size reads of whole rows
"""

from typing import Any, Dict, List

from app.database import ConnectionPool
from app.services.query_builder import build_select_first


def fetch_first_rows(pool: ConnectionPool, table: str, limit: int) -> List[Dict[str, Any]]:
    """First `limit` rows of `table` as column-name dicts, uninterpreted"""
    statement = build_select_first(table, limit)
    with pool.connection() as conn:
        result = conn.execute(statement.clause(), statement.params)
        return [dict(row._mapping) for row in result]
