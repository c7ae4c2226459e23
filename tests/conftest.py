"""Shared fixtures: an app bound to a fresh in-memory database per test."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import base64  # noqa: E402
import uuid  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from amari.core.security import create_session_token  # noqa: E402
from amari.db.base import create_tables, make_session_factory  # noqa: E402
from amari.main import create_app  # noqa: E402

ADMIN_ID = "admin-0001"
VENDOR_ID = "vendor-user-0001"
OTHER_VENDOR_ID = "vendor-user-0002"

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
PDF_DATA_URL = "data:application/pdf;base64," + base64.b64encode(PDF_BYTES).decode("ascii")


@pytest.fixture
def engine():
    return create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def client(engine):
    app = create_app()
    app.state.session_factory = make_session_factory(engine)
    with TestClient(app) as c:
        c.portal.call(create_tables, engine)
        yield c
        c.portal.call(engine.dispose)


def _auth(sub: str, user_type: str) -> dict[str, str]:
    token = create_session_token(sub, user_type, email=f"{sub}@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth():
    return _auth(ADMIN_ID, "admin")


@pytest.fixture
def vendor_auth():
    return _auth(VENDOR_ID, "vendor")


@pytest.fixture
def other_vendor_auth():
    return _auth(OTHER_VENDOR_ID, "vendor")


@pytest.fixture
def couple_auth():
    return _auth("couple-0001", "couple")


@pytest.fixture
def upload_document(client):
    """Upload a small PDF verification document and return its URL."""

    def _upload() -> str:
        resp = client.post(
            "/api/v1/files",
            json={
                "fileCategory": "verification_document",
                "fileName": "licence.pdf",
                "mimeType": "application/pdf",
                "fileData": PDF_DATA_URL,
            },
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["url"]

    return _upload


def _application_payload(**overrides) -> dict:
    payload = {
        "id": str(uuid.uuid4()),
        "userId": VENDOR_ID,
        "businessName": "Lamu Sunset Dhows",
        "vendorCategory": "Boat & Dhow Cruises",
        "vendorSubcategories": ["Sunset cruises", "", "Private charters"],
        "businessDescription": "Traditional dhow cruises around the Lamu archipelago.",
        "vendorStory": "Three generations of boat builders.",
        "primaryLocation": "Lamu, Kenya",
        "contactEmail": "hello@lamudhows.example",
        "contactPhone": "+254700000000",
        "website": "https://lamudhows.example",
        "socialLinks": {"instagram": "@lamudhows"},
        "startingPrice": "$1,200",
        "pricingModel": "package",
        "categorySpecific": {"vesselType": "Dhow", "maxPassengers": 40, "sunsetCruises": True},
        "realWorkImages": ["/api/v1/files/11111111-1111-1111-1111-111111111111"],
        "termsAccepted": True,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def application_payload():
    """Builder for a complete submission body; keyword overrides win."""
    return _application_payload


@pytest.fixture
def submit(client):
    """Submit an application and return its id."""

    def _submit(**overrides) -> str:
        resp = client.post("/api/v1/applications", json=_application_payload(**overrides))
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]["id"]

    return _submit
