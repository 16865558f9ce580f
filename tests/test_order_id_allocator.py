"""
Unit tests for order number allocation
"""

import pytest

from app.services.order_id_allocator import next_order_number
from app.utils.error_handler import DatabaseError


class TestNextOrderNumber:

    def test_empty_table_starts_at_one(self, pool):
        with pool.connection() as conn:
            assert next_order_number(conn) == 1

    def test_max_plus_one(self, pool, insert_order):
        for ord_num in (3, 200015, 17):
            insert_order(ord_num)

        with pool.connection() as conn:
            assert next_order_number(conn) == 200016

    def test_allocation_does_not_reserve(self, pool, insert_order):
        """Two reads without an insert in between return the same number"""
        insert_order(5)

        with pool.connection() as conn:
            first = next_order_number(conn)
        with pool.connection() as conn:
            second = next_order_number(conn)
        assert first == second == 6

    def test_query_failure_propagates(self, empty_pool):
        with pytest.raises(DatabaseError) as exc_info:
            with empty_pool.connection() as conn:
                next_order_number(conn)
        assert "no such table" in exc_info.value.message
        assert empty_pool.in_use == 0
