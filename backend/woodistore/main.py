from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from woodistore.core.config import settings
from woodistore.core.database import connect_to_mongo, close_mongo_connection
from woodistore.core.exceptions import (
    EmptyCartError,
    StockExceededError,
    SubmissionError,
    ValidationError
)
from woodistore.api.routes import products, cart, checkout, orders, customers, dashboard, admin_products

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend API for Woodistore - handcrafted goods storefront and admin back-office",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain error handlers
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.message, "errors": exc.errors}
    )


@app.exception_handler(EmptyCartError)
async def empty_cart_error_handler(request: Request, exc: EmptyCartError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message}
    )


@app.exception_handler(SubmissionError)
async def submission_error_handler(request: Request, exc: SubmissionError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "There was a problem placing your order. Please try again."}
    )


@app.exception_handler(StockExceededError)
async def stock_exceeded_error_handler(request: Request, exc: StockExceededError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": exc.message,
            "product_id": exc.product_id,
            "requested": exc.requested,
            "available": exc.available
        }
    )


# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    logger.info("Starting up Woodistore backend...")
    await connect_to_mongo()
    logger.info("Woodistore backend started successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up services on shutdown."""
    logger.info("Shutting down Woodistore backend...")
    await close_mongo_connection()
    logger.info("Woodistore backend shut down successfully")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "woodistore-backend",
        "version": "1.0.0"
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": "1.0.0",
        "description": "Woodistore Backend API",
        "docs": "/docs",
        "health": "/health"
    }


# Include routers
app.include_router(products.router, prefix=f"{settings.API_V1_PREFIX}/products", tags=["Products"])
app.include_router(cart.router, prefix=f"{settings.API_V1_PREFIX}/cart", tags=["Cart"])
app.include_router(checkout.router, prefix=f"{settings.API_V1_PREFIX}/checkout", tags=["Checkout"])
app.include_router(admin_products.router, prefix=f"{settings.API_V1_PREFIX}/admin/products", tags=["Admin - Products"])
app.include_router(orders.router, prefix=f"{settings.API_V1_PREFIX}/admin/orders", tags=["Admin - Orders"])
app.include_router(customers.router, prefix=f"{settings.API_V1_PREFIX}/admin/customers", tags=["Admin - Customers"])
app.include_router(dashboard.router, prefix=f"{settings.API_V1_PREFIX}/admin/dashboard", tags=["Admin - Dashboard"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
