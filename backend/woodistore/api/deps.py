import hmac
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from motor.motor_asyncio import AsyncIOMotorDatabase

from woodistore.core.config import settings
from woodistore.core.database import get_database
from woodistore.services.cart_service import CartService, CartStore
from woodistore.services.checkout_service import CheckoutService
from woodistore.services.order_service import OrderService

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    return get_database()


async def get_session_id(request: Request) -> str:
    """
    Dependency to get the shopper's session id.

    Raises:
        HTTPException: If the session header is missing
    """
    session_id = request.headers.get(settings.SESSION_HEADER)
    if not session_id or not session_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing {settings.SESSION_HEADER} header"
        )
    return session_id.strip()


async def get_cart(
    session_id: str = Depends(get_session_id),
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> CartStore:
    """Dependency to load the session's cart store for this request."""
    return await CartService.load_cart(
        session_id,
        db,
        enforce_stock=settings.ENFORCE_STOCK_LIMIT
    )


async def get_checkout_service(
    db: AsyncIOMotorDatabase = Depends(get_db)
) -> CheckoutService:
    """Dependency wiring checkout to the MongoDB order store."""
    return CheckoutService(
        OrderService(db),
        timeout=settings.ORDER_SUBMISSION_TIMEOUT_SECONDS
    )


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> None:
    """
    Dependency to ensure the request carries the admin API token.

    Raises:
        HTTPException: If the token is missing, wrong, or not configured
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None or not settings.ADMIN_API_TOKEN:
        raise credentials_exception

    if not hmac.compare_digest(credentials.credentials.encode(), settings.ADMIN_API_TOKEN.encode()):
        raise credentials_exception
