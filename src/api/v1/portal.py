"""Customer portal API — login callback, profile and account history."""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Body, Cookie, Depends, HTTPException, Response
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.database import get_db
from src.portal.auth import COOKIE_NAME, create_session, delete_session, verify_identity_claims
from src.portal.dependencies import require_portal_claims
from src.redis_client import get_redis
from src.repositories.customer import CustomerRepository
from src.repositories.lead import LeadRepository
from src.schemas.lead import ContactInquiryOut, QuoteRequestOut
from src.schemas.portal import (
    CustomerOrderOut,
    CustomerPaymentOut,
    PortalClaims,
    PortalCounts,
    PortalProfile,
    PortalUser,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["portal"])

NO_EMAIL = "No email associated with account"


def _user(claims: PortalClaims) -> PortalUser:
    return PortalUser(
        id=claims.sub,
        email=claims.email,
        first_name=claims.first_name,
        last_name=claims.last_name,
        profile_image_url=claims.profile_image_url,
    )


# --- Auth ---


@router.post("/auth/callback")
async def auth_callback(
    response: Response,
    data: dict[str, Any] = Body(...),
    redis: Redis = Depends(get_redis),
) -> dict:
    """Accept signed claims from the identity provider and start a session."""
    claims = verify_identity_claims(
        data,
        settings.portal_identity_secret,
        max_age=settings.portal_login_max_age_seconds,
    )
    if claims is None:
        raise HTTPException(status_code=401, detail="Invalid login data")

    token = await create_session(redis, claims, ttl=settings.portal_session_ttl_seconds)
    response.set_cookie(
        key=COOKIE_NAME,
        value=token,
        max_age=settings.portal_session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.environment != "development",
    )
    return {"success": True, "user": _user(claims).model_dump(by_alias=True)}


@router.post("/auth/logout")
async def auth_logout(
    response: Response,
    portal_token: Optional[str] = Cookie(None),
    redis: Redis = Depends(get_redis),
) -> dict:
    if portal_token:
        await delete_session(redis, portal_token)
    response.delete_cookie(COOKIE_NAME)
    return {"success": True}


@router.get("/auth/user", response_model=PortalUser)
async def auth_user(claims: PortalClaims = Depends(require_portal_claims)) -> PortalUser:
    return _user(claims)


# --- Portal ---


@router.get("/portal/profile", response_model=PortalProfile)
async def portal_profile(
    claims: PortalClaims = Depends(require_portal_claims),
    db: AsyncSession = Depends(get_db),
) -> PortalProfile:
    """Signed-in customer plus counts of their quotes, orders, payments and inquiries."""
    if not claims.email:
        raise HTTPException(status_code=400, detail=NO_EMAIL)

    leads = LeadRepository(db)
    customers = CustomerRepository(db)

    quotes = await leads.quotes_by_email(claims.email)
    orders = await customers.orders_for(claims.sub)
    payments = await customers.payments_for(claims.sub)
    inquiries = await leads.inquiries_by_email(claims.email)

    return PortalProfile(
        user=_user(claims),
        counts=PortalCounts(
            quotes=len(quotes),
            orders=len(orders),
            payments=len(payments),
            inquiries=len(inquiries),
        ),
    )


@router.get("/portal/quotes", response_model=list[QuoteRequestOut])
async def portal_quotes(
    claims: PortalClaims = Depends(require_portal_claims),
    db: AsyncSession = Depends(get_db),
) -> list[QuoteRequestOut]:
    """Quotes linked to the account; falls back to quotes sent with the same email."""
    leads = LeadRepository(db)
    quotes = list(await leads.quotes_by_customer(claims.sub)) if claims.sub else []
    if not quotes and claims.email:
        quotes = list(await leads.quotes_by_email(claims.email))
    return [QuoteRequestOut.model_validate(q) for q in quotes]


@router.get("/portal/orders", response_model=list[CustomerOrderOut])
async def portal_orders(
    claims: PortalClaims = Depends(require_portal_claims),
    db: AsyncSession = Depends(get_db),
) -> list[CustomerOrderOut]:
    if not claims.sub:
        raise HTTPException(status_code=401, detail="Unauthorized")
    orders = await CustomerRepository(db).orders_for(claims.sub)
    return [CustomerOrderOut.model_validate(o) for o in orders]


@router.get("/portal/payments", response_model=list[CustomerPaymentOut])
async def portal_payments(
    claims: PortalClaims = Depends(require_portal_claims),
    db: AsyncSession = Depends(get_db),
) -> list[CustomerPaymentOut]:
    if not claims.sub:
        raise HTTPException(status_code=401, detail="Unauthorized")
    payments = await CustomerRepository(db).payments_for(claims.sub)
    return [CustomerPaymentOut.model_validate(p) for p in payments]


@router.get("/portal/inquiries", response_model=list[ContactInquiryOut])
async def portal_inquiries(
    claims: PortalClaims = Depends(require_portal_claims),
    db: AsyncSession = Depends(get_db),
) -> list[ContactInquiryOut]:
    if not claims.email:
        raise HTTPException(status_code=400, detail=NO_EMAIL)
    inquiries = await LeadRepository(db).inquiries_by_email(claims.email)
    return [ContactInquiryOut.model_validate(i) for i in inquiries]
