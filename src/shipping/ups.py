"""UPS Rating API client — OAuth token cache and Shop rate quotes."""

from __future__ import annotations

import time
from typing import Any, Optional

import httpx
import redis.asyncio as redis
import structlog

from src.config import settings
from src.redis_client import get_redis_client
from src.schemas.shipping import RateRequest, ShippingRate

logger = structlog.get_logger()

TOKEN_CACHE_KEY = "ups:access_token"
TOKEN_PATH = "/security/v1/oauth/token"
SHOP_PATH = "/api/rating/v2403/Shop"

SERVICE_NAMES = {
    "01": "UPS Next Day Air",
    "02": "UPS 2nd Day Air",
    "03": "UPS Ground",
    "07": "UPS Worldwide Express",
    "08": "UPS Worldwide Expedited",
    "11": "UPS Standard",
    "12": "UPS 3 Day Select",
    "13": "UPS Next Day Air Saver",
    "14": "UPS Next Day Air Early",
    "54": "UPS Worldwide Express Plus",
    "59": "UPS 2nd Day Air A.M.",
    "65": "UPS Worldwide Saver",
    "82": "UPS Today Standard",
    "83": "UPS Today Dedicated Courier",
    "84": "UPS Today Intercity",
    "85": "UPS Today Express",
    "86": "UPS Today Express Saver",
    "96": "UPS Worldwide Express Freight",
}


class UPSError(Exception):
    """Base error for the UPS integration."""


class UPSConfigurationError(UPSError):
    """Credentials or account number are missing."""


class UPSAuthError(UPSError):
    """The OAuth token request was rejected."""


class UPSRatingError(UPSError):
    """The Rating API returned a non-2xx response."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"UPS rating failed: {status_code}")
        self.status_code = status_code
        self.body = body


def _num(value: float) -> str:
    """UPS wants numbers as strings: 12.0 -> "12", 12.5 -> "12.5"."""
    return str(int(value)) if float(value).is_integer() else str(value)


def _address(city: str, state: str, postal: str, country: str) -> dict[str, str]:
    return {
        "City": city,
        "StateProvinceCode": state,
        "PostalCode": postal,
        "CountryCode": country,
    }


def build_rate_payload(request: RateRequest, account_number: str) -> dict[str, Any]:
    """Shop request body for a single package."""
    origin = _address(
        request.origin_city, request.origin_state, request.origin_postal, request.origin_country
    )
    destination = _address(
        request.dest_city, request.dest_state, request.dest_postal, request.dest_country
    )
    return {
        "RateRequest": {
            "Request": {
                "SubVersion": "2205",
                "TransactionReference": {"CustomerContext": "Rate Request"},
            },
            "Shipment": {
                "Shipper": {"ShipperNumber": account_number, "Address": origin},
                "ShipTo": {"Address": destination},
                "ShipFrom": {"Address": origin},
                "Package": {
                    "PackagingType": {"Code": "02"},
                    "Dimensions": {
                        "UnitOfMeasurement": {"Code": "IN"},
                        "Length": _num(request.length_in),
                        "Width": _num(request.width_in),
                        "Height": _num(request.height_in),
                    },
                    "PackageWeight": {
                        "UnitOfMeasurement": {"Code": "LBS"},
                        "Weight": _num(request.weight_lbs),
                    },
                },
            },
        }
    }


def _charge_value(rate: ShippingRate) -> float:
    try:
        return float(rate.total_charges)
    except ValueError:
        return float("inf")


def reshape_rates(data: dict[str, Any]) -> list[ShippingRate]:
    """Flatten RatedShipment entries, cheapest first."""
    rated = (data.get("RateResponse") or {}).get("RatedShipment") or []
    # A single service comes back as an object, not a list
    if isinstance(rated, dict):
        rated = [rated]

    rates = []
    for shipment in rated:
        code = (shipment.get("Service") or {}).get("Code") or ""
        charges = shipment.get("TotalCharges") or {}
        guaranteed = shipment.get("GuaranteedDelivery") or {}
        billing = shipment.get("BillingWeight") or {}
        rates.append(
            ShippingRate(
                service_code=code,
                service_name=SERVICE_NAMES.get(code, f"UPS Service {code}"),
                total_charges=charges.get("MonetaryValue") or "0",
                currency=charges.get("CurrencyCode") or "USD",
                guaranteed_days=guaranteed.get("BusinessDaysInTransit") or None,
                delivery_by_time=guaranteed.get("DeliveryByTime") or None,
                billing_weight=billing.get("Weight") or None,
                billing_weight_unit=(billing.get("UnitOfMeasurement") or {}).get("Code") or "LBS",
            )
        )

    rates.sort(key=_charge_value)
    return rates


def origin_label(request: RateRequest) -> str:
    return f"{request.origin_city}, {request.origin_state} {request.origin_postal}"


def destination_label(request: RateRequest) -> str:
    return (
        f"{request.dest_city}, {request.dest_state or ''} "
        f"{request.dest_postal} {request.dest_country}"
    )


class UPSClient:
    """Thin async client over the UPS OAuth and Rating endpoints."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        account_number: str,
        base_url: str,
        redis_client: redis.Redis,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.account_number = account_number
        self.base_url = base_url.rstrip("/")
        self.redis = redis_client
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, transport=self._transport, timeout=30.0
        )

    async def get_token(self) -> str:
        """Return a cached access token, fetching a new one when expired."""
        cached = await self.redis.get(TOKEN_CACHE_KEY)
        if cached:
            return cached

        if not self.client_id or not self.client_secret:
            raise UPSConfigurationError("UPS credentials not configured")

        async with self._http() as client:
            response = await client.post(
                TOKEN_PATH,
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
            )

        if response.is_error:
            logger.error("ups_auth_failed", status=response.status_code, body=response.text[:500])
            raise UPSAuthError(f"UPS authentication failed: {response.status_code}")

        data = response.json()
        token = data["access_token"]
        ttl = int(data.get("expires_in", 0)) - 60
        if ttl > 0:
            await self.redis.setex(TOKEN_CACHE_KEY, ttl, token)

        logger.info("ups_token_refreshed", ttl=ttl)
        return token

    async def shop_rates(self, request: RateRequest) -> list[ShippingRate]:
        """Rate a single package across all available services.

        Raises:
            UPSConfigurationError: no account number or credentials
            UPSAuthError: token request rejected
            UPSRatingError: Rating API returned an error status
        """
        if not self.account_number:
            raise UPSConfigurationError("UPS account not configured")

        token = await self.get_token()
        payload = build_rate_payload(request, self.account_number)

        async with self._http() as client:
            response = await client.post(
                SHOP_PATH,
                headers={
                    "Authorization": f"Bearer {token}",
                    "transId": f"ami-{int(time.time() * 1000)}",
                    "transactionSrc": "AmericanIronLLC",
                },
                json=payload,
            )

        if response.is_error:
            logger.error(
                "ups_rating_failed",
                status=response.status_code,
                body=response.text[:500],
            )
            raise UPSRatingError(response.status_code, response.text)

        rates = reshape_rates(response.json())
        logger.info(
            "ups_rates_fetched",
            origin=origin_label(request),
            destination=destination_label(request),
            services=len(rates),
        )
        return rates


def get_ups_client() -> UPSClient:
    return UPSClient(
        client_id=settings.ups_client_id,
        client_secret=settings.ups_client_secret,
        account_number=settings.ups_account_number,
        base_url=settings.ups_base_url,
        redis_client=get_redis_client(),
    )
