"""
Customer listing endpoint
"""

from fastapi import APIRouter, Depends, Request

from app.config import Settings, get_app_settings
from app.database import ConnectionPool, get_pool
from app.models.customer import Customer
from app.schemas.order import DatabaseErrorResponse
from app.services.table_reader import fetch_first_rows
from app.utils.rate_limit import limiter, READ_LIMIT

router = APIRouter()

@router.get(
    "",
    summary="Get first customers",
    responses={500: {"model": DatabaseErrorResponse, "description": "Server error"}}
)
@limiter.limit(READ_LIMIT)
def list_customers(
    request: Request,
    pool: ConnectionPool = Depends(get_pool),
    settings: Settings = Depends(get_app_settings)
):
    rows = fetch_first_rows(pool, Customer.__tablename__, settings.list_limit)
    return {"total": len(rows), "customers": rows}
