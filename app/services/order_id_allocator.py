"""
Order number allocation
"""

import logging

from sqlalchemy.engine import Connection

from app.services.query_builder import build_max_order_number

logger = logging.getLogger(__name__)


def next_order_number(conn: Connection) -> int:
    """Return MAX(ORD_NUM) + 1, or 1 when the orders table is empty.

    The read and the following INSERT are separate statements with no lock
    held between them. Two concurrent creations can compute the same number;
    the primary key on ORD_NUM then rejects the second INSERT.
    """
    statement = build_max_order_number()
    current_max = conn.execute(statement.clause(), statement.params).scalar()
    next_num = int(current_max or 0) + 1
    logger.debug(f"Allocated order number {next_num}")
    return next_num
