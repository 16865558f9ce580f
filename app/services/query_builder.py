"""
Parameterized SQL for the order, customer and student tables

Values always travel as bound parameters. Only table and column names
from the fixed allow-lists below are ever written into the SQL text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from app.models.customer import Customer
from app.models.order import Order, ORDER_COLUMNS
from app.models.student import Student
from app.utils.error_handler import EmptyUpdateError

ORDERS_TABLE = Order.__tablename__
READABLE_TABLES = (Order.__tablename__, Customer.__tablename__, Student.__tablename__)


@dataclass(frozen=True)
class Statement:
    """SQL text with named placeholders plus the values bound to them"""
    sql: str
    params: Dict[str, Any] = field(default_factory=dict)

    def clause(self) -> TextClause:
        return text(self.sql)


def _order_values(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {column: fields.get(column) for column in ORDER_COLUMNS}


def build_select_first(table: str, limit: int) -> Statement:
    if table not in READABLE_TABLES:
        raise ValueError(f"Table '{table}' is not readable")
    return Statement(f"SELECT * FROM {table} LIMIT :limit", {"limit": limit})


def build_max_order_number() -> Statement:
    return Statement(f"SELECT MAX(ORD_NUM) AS maxNum FROM {ORDERS_TABLE}")


def build_insert_order(ord_num: int, fields: Mapping[str, Any]) -> Statement:
    """INSERT of all seven order columns, ORD_NUM first"""
    columns = ("ORD_NUM",) + ORDER_COLUMNS
    placeholders = ", ".join(f":{column}" for column in columns)
    params = {"ORD_NUM": ord_num, **_order_values(fields)}
    return Statement(
        f"INSERT INTO {ORDERS_TABLE} ({', '.join(columns)}) VALUES ({placeholders})",
        params,
    )


def build_replace_order(ord_num: int, fields: Mapping[str, Any]) -> Statement:
    """UPDATE of the writable columns present in fields, keyed by ORD_NUM.

    ORD_DESCRIPTION may be left out, in which case the stored value is kept.
    """
    columns = [column for column in ORDER_COLUMNS if column in fields]
    assignments = ", ".join(f"{column}=:{column}" for column in columns)
    params = {column: fields[column] for column in columns}
    params["ORD_NUM"] = ord_num
    return Statement(
        f"UPDATE {ORDERS_TABLE} SET {assignments} WHERE ORD_NUM=:ORD_NUM",
        params,
    )


def build_patch_order(ord_num: int, changes: Mapping[str, Any]) -> Statement:
    """UPDATE of only the columns present in changes.

    Keys outside ORDER_COLUMNS are dropped. Raises EmptyUpdateError when no
    column is left, so an empty SET clause is never produced.
    """
    columns = [key for key in changes if key in ORDER_COLUMNS]
    if not columns:
        raise EmptyUpdateError()

    assignments = ", ".join(f"{column}=:{column}" for column in columns)
    params = {column: changes[column] for column in columns}
    params["ORD_NUM"] = ord_num
    return Statement(
        f"UPDATE {ORDERS_TABLE} SET {assignments} WHERE ORD_NUM=:ORD_NUM",
        params,
    )


def build_delete_order(ord_num: int) -> Statement:
    return Statement(f"DELETE FROM {ORDERS_TABLE} WHERE ORD_NUM=:ORD_NUM", {"ORD_NUM": ord_num})
