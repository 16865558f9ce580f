"""
Order management endpoints
"""

from fastapi import APIRouter, Depends, Path, Request
import logging

from app.config import Settings, get_app_settings
from app.database import ConnectionPool, get_pool
from app.models.order import Order
from app.schemas.order import (
    OrderCreate, OrderReplace, OrderPatch,
    OrderCreatedResponse, OrderWriteResponse, MessageResponse,
    ValidationErrorResponse, DatabaseErrorResponse
)
from app.services.order_service import OrderService
from app.services.table_reader import fetch_first_rows
from app.utils.rate_limit import limiter, READ_LIMIT, WRITE_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()

VALIDATION_ERROR = {400: {"model": ValidationErrorResponse, "description": "Validation error"}}
NOT_FOUND = {404: {"model": MessageResponse, "description": "Order not found"}}
SERVER_ERROR = {500: {"model": DatabaseErrorResponse, "description": "Server error"}}

@router.get("", summary="Get first orders", responses=SERVER_ERROR)
@limiter.limit(READ_LIMIT)
def list_orders(
    request: Request,
    pool: ConnectionPool = Depends(get_pool),
    settings: Settings = Depends(get_app_settings)
):
    """Return the first rows of the orders table"""
    rows = fetch_first_rows(pool, Order.__tablename__, settings.list_limit)
    logger.debug(f"Listed {len(rows)} orders")
    return {"total": len(rows), "orders": rows}

@router.post(
    "",
    summary="Create a new order",
    status_code=201,
    response_model=OrderCreatedResponse,
    responses={**VALIDATION_ERROR, **SERVER_ERROR}
)
@limiter.limit(WRITE_LIMIT)
def create_order(
    request: Request,
    order: OrderCreate,
    pool: ConnectionPool = Depends(get_pool)
):
    """Create a new order; ORD_NUM is one more than the current maximum"""
    ord_num = OrderService(pool).create_order(order)
    return OrderCreatedResponse(message="Order created successfully", ORD_NUM=ord_num)

@router.put(
    "/{ORD_NUM}",
    summary="Replace an order completely",
    response_model=OrderWriteResponse,
    responses={**VALIDATION_ERROR, **NOT_FOUND, **SERVER_ERROR}
)
@limiter.limit(WRITE_LIMIT)
def replace_order(
    request: Request,
    order: OrderReplace,
    ORD_NUM: int = Path(..., description="The order number"),
    pool: ConnectionPool = Depends(get_pool)
):
    """Replace every field of an existing order"""
    OrderService(pool).replace_order(ORD_NUM, order)
    return OrderWriteResponse(message="Order updated", ORD_NUM=ORD_NUM)

@router.patch(
    "/{ORD_NUM}",
    summary="Partially update an order",
    response_model=MessageResponse,
    responses={**VALIDATION_ERROR, **NOT_FOUND, **SERVER_ERROR}
)
@limiter.limit(WRITE_LIMIT)
def patch_order(
    request: Request,
    patch: OrderPatch,
    ORD_NUM: int = Path(..., description="The order number"),
    pool: ConnectionPool = Depends(get_pool)
):
    """Update only the fields present in the request body"""
    OrderService(pool).patch_order(ORD_NUM, patch)
    return MessageResponse(message="Order partially updated")

@router.delete(
    "/{ORD_NUM}",
    summary="Delete an order",
    response_model=OrderWriteResponse,
    responses={**VALIDATION_ERROR, **NOT_FOUND, **SERVER_ERROR}
)
@limiter.limit(WRITE_LIMIT)
def delete_order(
    request: Request,
    ORD_NUM: int = Path(..., description="The order number"),
    pool: ConnectionPool = Depends(get_pool)
):
    """Delete an order"""
    OrderService(pool).delete_order(ORD_NUM)
    return OrderWriteResponse(message="Order deleted", ORD_NUM=ORD_NUM)
