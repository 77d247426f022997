"""API tests with dependencies overridden (no database, Redis or network)."""

import threading
import time
from contextlib import asynccontextmanager
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.v1.catalog import get_catalog
from src.api.v1.estimator import get_session_factory
from src.config import settings
from src.database import get_db
from src.llm.client import get_llm_client
from src.main import app
from src.notifications.email import EmailDeliveryError, get_mailer
from src.portal.auth import sign_identity_claims
from src.redis_client import get_redis
from src.schemas.portal import PortalClaims
from src.schemas.shipping import ShippingRate
from src.shipping.ups import UPSRatingError, get_ups_client

RATE_BODY = {
    "originCity": "Tampa",
    "originState": "FL",
    "originPostal": "33618",
    "destCity": "Austin",
    "destState": "TX",
    "destPostal": "73301",
    "weightLbs": 10,
    "lengthIn": 12,
    "widthIn": 10,
    "heightIn": 8,
}


@pytest.fixture
def client(mock_db, mock_redis, mock_mailer):
    async def override_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_redis] = lambda: mock_redis
    app.dependency_overrides[get_mailer] = lambda: mock_mailer
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def catalog():
    repo = MagicMock()
    app.dependency_overrides[get_catalog] = lambda: repo
    return repo


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "American Iron API"


class TestCatalogRoutes:
    def test_list_equipment(self, client, catalog, sample_equipment):
        catalog.list_equipment = AsyncMock(return_value=([sample_equipment], 1))

        response = client.get("/api/equipment", params={"category": "EXCAVATORS", "page": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["items"][0]["equipmentId"] == "AI-1042"
        catalog.list_equipment.assert_awaited_once_with("EXCAVATORS", None, 2, 24)

    def test_equipment_not_found(self, client, catalog):
        catalog.get_equipment = AsyncMock(return_value=None)

        response = client.get("/api/equipment/NOPE")

        assert response.status_code == 404
        assert response.json() == {"error": "Equipment not found"}

    def test_limit_is_capped(self, client, catalog):
        response = client.get("/api/parts", params={"limit": 500})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_invalid_part_id(self, client, catalog):
        response = client.get("/api/parts/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid part ID"}

    def test_parts_lookup(self, client, catalog, sample_part):
        catalog.parts_by_numbers = AsyncMock(return_value=[sample_part])

        response = client.get("/api/parts/lookup", params={"numbers": "1R0750, 4N8969,"})

        assert response.status_code == 200
        assert response.json()[0]["partNumber"] == "1R0750"
        catalog.parts_by_numbers.assert_awaited_once_with(["1R0750", "4N8969"])

    def test_power_unit(self, client, catalog, sample_power_unit):
        catalog.get_power_unit = AsyncMock(return_value=sample_power_unit)

        response = client.get("/api/power-units/3")

        assert response.status_code == 200
        assert response.json()["stockNumber"] == "PU-003"
        catalog.get_power_unit.assert_awaited_once_with(3)

    def test_stats(self, client, catalog):
        catalog.equipment_count = AsyncMock(return_value=2100)
        catalog.parts_count = AsyncMock(return_value=17500)
        catalog.power_units_count = AsyncMock(return_value=150)

        response = client.get("/api/stats")

        assert response.json() == {"equipmentCount": 2100, "partsCount": 17500, "powerUnitsCount": 150}


class TestLeadRoutes:
    def test_create_quote_request(self, client, monkeypatch, sample_quote_request):
        repo = MagicMock()
        repo.create_quote_request = AsyncMock(return_value=sample_quote_request)
        notify = AsyncMock(return_value=True)
        monkeypatch.setattr("src.api.v1.leads.LeadRepository", lambda db: repo)
        monkeypatch.setattr("src.api.v1.leads.notify_quote_request", notify)

        response = client.post("/api/quotes", json={
            "name": "Dana Reyes",
            "email": "dana@example.com",
            "shipTo": "Houston, TX",
            "items": "1R0750 x2",
        })

        assert response.status_code == 201
        assert response.json()["shipTo"] == "Houston, TX"
        assert repo.create_quote_request.await_args.kwargs["customer_id"] is None
        notify.assert_awaited_once()

    def test_quote_request_committed_before_emails(self, client, monkeypatch, mock_db, sample_quote_request):
        repo = MagicMock()
        repo.create_quote_request = AsyncMock(return_value=sample_quote_request)
        commits_seen = []

        async def notify(quote, mailer):
            commits_seen.append(mock_db.commit.await_count)
            return True

        monkeypatch.setattr("src.api.v1.leads.LeadRepository", lambda db: repo)
        monkeypatch.setattr("src.api.v1.leads.notify_quote_request", notify)

        response = client.post("/api/quotes", json={"name": "Dana Reyes", "email": "dana@example.com"})

        assert response.status_code == 201
        assert commits_seen == [1]

    def test_no_emails_when_commit_fails(self, client, monkeypatch, mock_db):
        inquiry = SimpleNamespace(id=6, name="Lee", email="lee@example.com", message="Hi", created_at=None)
        repo = MagicMock()
        repo.create_contact_inquiry = AsyncMock(return_value=inquiry)
        notify = AsyncMock(return_value=True)
        mock_db.commit = AsyncMock(side_effect=RuntimeError("connection lost"))
        monkeypatch.setattr("src.api.v1.leads.LeadRepository", lambda db: repo)
        monkeypatch.setattr("src.api.v1.leads.notify_contact_inquiry", notify)

        response = TestClient(app, raise_server_exceptions=False).post(
            "/api/contact", json={"name": "Lee", "email": "lee@example.com", "message": "Hi"}
        )

        assert response.status_code == 500
        notify.assert_not_awaited()

    def test_quote_request_requires_valid_email(self, client):
        response = client.post("/api/quotes", json={"name": "Dana", "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    def test_create_contact_inquiry(self, client, monkeypatch):
        inquiry = SimpleNamespace(id=5, name="Lee", email="lee@example.com", message="Hello", created_at=None)
        repo = MagicMock()
        repo.create_contact_inquiry = AsyncMock(return_value=inquiry)
        monkeypatch.setattr("src.api.v1.leads.LeadRepository", lambda db: repo)
        monkeypatch.setattr("src.api.v1.leads.notify_contact_inquiry", AsyncMock(return_value=False))

        response = client.post("/api/contact", json={"name": "Lee", "email": "lee@example.com", "message": "Hello"})

        assert response.status_code == 201
        assert response.json()["id"] == 5


class TestQuoteEmail:
    BODY = {
        "email": "dana@example.com",
        "itemType": "equipment",
        "itemId": "AI-1042",
        "quoteNumber": "Q-1001",
        "quoteDate": "2026-10-19T09:00:00",
    }

    @pytest.fixture
    def quote_catalog(self, monkeypatch, sample_equipment):
        repo = MagicMock()
        repo.get_equipment = AsyncMock(return_value=sample_equipment)
        repo.get_power_unit = AsyncMock(return_value=None)
        monkeypatch.setattr("src.api.v1.quotes.CatalogRepository", lambda db: repo)
        return repo

    def test_sends_pdf_attachment(self, client, quote_catalog, mock_mailer):
        response = client.post("/api/quotes/send-email", json=self.BODY)

        assert response.status_code == 200
        assert response.json() == {"success": True, "emailId": "em_123"}
        kwargs = mock_mailer.send.await_args.kwargs
        assert kwargs["to"] == "dana@example.com"
        attachment = kwargs["attachments"][0]
        assert attachment.filename == "American_Iron_Quote_Q-1001.pdf"
        assert attachment.content.startswith(b"%PDF")

    def test_pdf_rendered_off_the_event_loop(self, client, quote_catalog, mock_mailer, monkeypatch):
        threads = {}

        def fake_render(doc, logo_path=None):
            threads["render"] = threading.get_ident()
            return b"%PDF-1.4"

        async def send(**kwargs):
            threads["loop"] = threading.get_ident()
            return "em_456"

        monkeypatch.setattr("src.api.v1.quotes.render_quote_pdf", fake_render)
        mock_mailer.send = AsyncMock(side_effect=send)

        response = client.post("/api/quotes/send-email", json=self.BODY)

        assert response.status_code == 200
        assert threads["render"] != threads["loop"]

    def test_invalid_power_unit_id(self, client, quote_catalog):
        body = dict(self.BODY, itemType="power-unit", itemId="abc")

        response = client.post("/api/quotes/send-email", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid power unit ID"}

    def test_power_unit_not_found(self, client, quote_catalog):
        body = dict(self.BODY, itemType="power-unit", itemId="42")

        response = client.post("/api/quotes/send-email", json=body)

        assert response.status_code == 404

    def test_provider_rejection(self, client, quote_catalog, mock_mailer):
        mock_mailer.send = AsyncMock(side_effect=EmailDeliveryError("422: domain not verified"))

        response = client.post("/api/quotes/send-email", json=self.BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to send email", "details": "422: domain not verified"}


class TestEstimateRoute:
    def test_streams_events(self, client, monkeypatch, mock_db):
        class Stream:
            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc):
                return False

            @property
            def text_stream(self):
                async def gen():
                    yield "Excavators: 2"
                return gen()

        llm = MagicMock()
        llm.messages.stream = MagicMock(return_value=Stream())

        @asynccontextmanager
        async def factory():
            yield mock_db

        app.dependency_overrides[get_llm_client] = lambda: llm
        app.dependency_overrides[get_session_factory] = lambda: factory
        monkeypatch.setattr("src.api.v1.estimator.cached_inventory_context", AsyncMock(return_value="ctx"))

        response = client.post("/api/estimate", json={
            "projectName": "Harbor Road",
            "projectType": "Road Construction",
            "location": "Tampa, FL",
            "terrain": "Flat",
            "projectSize": "2 miles",
            "duration": "6 months",
        })

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert 'data: {"content":"Excavators: 2"}' in response.text
        assert response.text.endswith('data: {"done":true}\n\n')

    def test_missing_fields(self, client):
        response = client.post("/api/estimate", json={"projectName": "x"})

        assert response.status_code == 400


class TestShippingRoute:
    def _ups(self, **kwargs):
        ups = SimpleNamespace(account_number="A1B2C3", shop_rates=AsyncMock(**kwargs))
        app.dependency_overrides[get_ups_client] = lambda: ups
        return ups

    def test_rates(self, client):
        self._ups(return_value=[ShippingRate(service_code="03", service_name="UPS Ground", total_charges="18.42")])

        response = client.post("/api/shipping/ups-rates", json=RATE_BODY)

        assert response.status_code == 200
        body = response.json()
        assert body["rates"][0]["serviceName"] == "UPS Ground"
        assert body["origin"] == "Tampa, FL 33618"

    def test_missing_account(self, client):
        ups = self._ups()
        ups.account_number = ""

        response = client.post("/api/shipping/ups-rates", json=RATE_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "UPS account not configured"}

    def test_rating_failure_is_bad_gateway(self, client):
        self._ups(side_effect=UPSRatingError(400, "bad address"))

        response = client.post("/api/shipping/ups-rates", json=RATE_BODY)

        assert response.status_code == 502

    def test_overweight_package(self, client):
        self._ups()

        response = client.post("/api/shipping/ups-rates", json=dict(RATE_BODY, weightLbs=200))

        assert response.status_code == 400


class TestPortalRoutes:
    def _signed_login(self, **claims) -> dict:
        data = {"sub": "cust-42", "email": "dana@example.com", "auth_date": str(int(time.time()))}
        data.update(claims)
        data["hash"] = sign_identity_claims(data, settings.portal_identity_secret)
        return data

    def test_login_sets_cookie(self, client, mock_redis):
        response = client.post("/api/auth/callback", json=self._signed_login())

        assert response.status_code == 200
        assert response.json()["user"]["id"] == "cust-42"
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("portal_token=")
        assert "HttpOnly" in cookie
        mock_redis.setex.assert_awaited_once()

    def test_bad_signature(self, client):
        data = self._signed_login()
        data["sub"] = "someone-else"

        response = client.post("/api/auth/callback", json=data)

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid login data"}

    def test_portal_requires_session(self, client):
        response = client.get("/api/portal/profile")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_profile_without_email(self, client, mock_redis):
        mock_redis.get.return_value = PortalClaims(sub="cust-42").model_dump_json()

        response = client.get("/api/portal/profile", headers={"Cookie": "portal_token=tok"})

        assert response.status_code == 400
        assert response.json() == {"error": "No email associated with account"}

    def test_quotes_fall_back_to_email(self, client, mock_redis, monkeypatch, sample_quote_request):
        mock_redis.get.return_value = PortalClaims(sub="cust-42", email="dana@example.com").model_dump_json()
        leads = MagicMock()
        leads.quotes_by_customer = AsyncMock(return_value=[])
        leads.quotes_by_email = AsyncMock(return_value=[sample_quote_request])
        monkeypatch.setattr("src.api.v1.portal.LeadRepository", lambda db: leads)

        response = client.get("/api/portal/quotes", headers={"Cookie": "portal_token=tok"})

        assert response.status_code == 200
        assert [q["id"] for q in response.json()] == [11]
        leads.quotes_by_email.assert_awaited_once_with("dana@example.com")

    def test_current_user(self, client, mock_redis):
        mock_redis.get.return_value = PortalClaims(sub="cust-42", first_name="Dana").model_dump_json()

        response = client.get("/api/auth/user", headers={"Cookie": "portal_token=tok"})

        assert response.json()["firstName"] == "Dana"
