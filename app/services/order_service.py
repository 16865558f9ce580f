"""
Order service: orchestrates allocation and writes for the orders table
"""

import logging

from app.database import ConnectionPool
from app.schemas.order import OrderCreate, OrderReplace, OrderPatch
from app.services.order_id_allocator import next_order_number
from app.services.query_builder import (
    Statement, build_insert_order, build_replace_order, build_patch_order, build_delete_order
)
from app.utils.error_handler import OrderNotFoundError

logger = logging.getLogger(__name__)

class OrderService:
    """Service for order write operations"""
    
    def __init__(self, pool: ConnectionPool):
        self.pool = pool
    
    def create_order(self, order: OrderCreate) -> int:
        """Insert a new order under the next free ORD_NUM and return that number"""
        with self.pool.connection() as conn:
            ord_num = next_order_number(conn)
            statement = build_insert_order(ord_num, order.model_dump())
            conn.execute(statement.clause(), statement.params)
        
        logger.info(f"Created order {ord_num}")
        return ord_num
    
    def replace_order(self, ord_num: int, order: OrderReplace) -> None:
        """Overwrite the columns of an existing order; an omitted description is kept"""
        self._write(ord_num, build_replace_order(ord_num, order.model_dump(exclude_none=True)))
        logger.info(f"Replaced order {ord_num}")
    
    def patch_order(self, ord_num: int, patch: OrderPatch) -> None:
        """Update only the columns sent by the client"""
        # Built before a connection is taken, so an empty patch never reaches the pool
        statement = build_patch_order(ord_num, patch.changes())
        self._write(ord_num, statement)
        logger.info(f"Patched order {ord_num}: {', '.join(k for k in statement.params if k != 'ORD_NUM')}")
    
    def delete_order(self, ord_num: int) -> None:
        self._write(ord_num, build_delete_order(ord_num))
        logger.info(f"Deleted order {ord_num}")
    
    def _write(self, ord_num: int, statement: Statement) -> None:
        """Run a keyed write; zero affected rows means the order does not exist"""
        with self.pool.connection() as conn:
            affected = conn.execute(statement.clause(), statement.params).rowcount
        
        if affected == 0:
            raise OrderNotFoundError(ord_num)
