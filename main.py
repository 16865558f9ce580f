"""
Sample Orders API
A FastAPI application exposing the orders, customer and student tables of the sample database
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
import uvicorn
from contextlib import asynccontextmanager
import logging
import time
from datetime import datetime

# Import our modules
from app.config import get_settings
from app.database import Base, ConnectionPool, get_pool
from app.routers import orders, customers, students
from app.utils.error_handler import DatabaseError, register_exception_handlers
from app.utils.rate_limit import limiter

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the connection pool on startup and dispose of it on shutdown"""
    logger.info("Starting Sample Orders API...")
    pool = ConnectionPool.from_settings(settings)
    app.state.pool = pool
    if settings.create_tables:
        Base.metadata.create_all(bind=pool.engine)
        logger.info("Database tables created/verified")

    yield

    logger.info("Shutting down Sample Orders API...")
    pool.dispose()
    app.state.pool = None

# Create FastAPI app
app = FastAPI(
    title="Student & Customer API",
    description="Read access to customers and students, full lifecycle for orders",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)
app.state.settings = settings

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

register_exception_handlers(app)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
    return response

# Include routers
app.include_router(orders.router, prefix="/orders", tags=["orders"])
app.include_router(customers.router, prefix="/customers", tags=["customers"])
app.include_router(students.router, prefix="/students", tags=["students"])

@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Student & Customer API",
        "version": API_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "timestamp": datetime.utcnow().isoformat()
    }

@app.get("/health")
def health_check(pool: ConnectionPool = Depends(get_pool)):
    """Health check endpoint; 503 when the database cannot be reached"""
    try:
        pool.ping()
    except DatabaseError as e:
        logger.warning(f"Health check failed: {e.message}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "unreachable"}
        )
    return {
        "status": "healthy",
        "database": "reachable",
        "timestamp": datetime.utcnow().isoformat()
    }

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )
