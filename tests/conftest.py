import json

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from portal.core.config import settings
from portal.core.database import Base, get_db
from portal.core.webhook import WebhookClient, get_webhook_client


FLOW_URLS = {
    "POWER_AUTOMATE_DESIGN_REQUEST_URL": "https://flows.example.com/design",
    "POWER_AUTOMATE_LSM_REQUEST_URL": "https://flows.example.com/lsm",
    "POWER_AUTOMATE_PRICE_CHANGE_URL": "https://flows.example.com/price",
    "POWER_AUTOMATE_STORE_HOURS_URL": "https://flows.example.com/hours",
}


class FakeWebhook:
    """Records forwarded payloads and answers with a configurable status."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.fail_with_network_error = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.fail_with_network_error:
            raise httpx.ConnectError("connection refused", request=request)
        self.requests.append(
            {"url": str(request.url), "json": json.loads(request.content)}
        )
        return httpx.Response(self.status_code, json={"ok": self.status_code < 400})

    def client(self) -> WebhookClient:
        return WebhookClient(transport=httpx.MockTransport(self.handler))

    @property
    def payloads(self):
        return [r["json"] for r in self.requests]


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def webhook():
    return FakeWebhook()


@pytest.fixture
def flow_urls(monkeypatch):
    for name, url in FLOW_URLS.items():
        monkeypatch.setattr(settings, name, url)
    return FLOW_URLS


@pytest.fixture
def client(db_session, webhook, flow_urls):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_webhook_client] = webhook.client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ============================================================================
# Valid submissions
# ============================================================================

@pytest.fixture
def design_request_data():
    return {
        "storeNumber": "1234",
        "storeName": "Yogurtland - Downtown LA",
        "contactName": "Dana Lee",
        "email": "dana@example.com",
        "phone": "555-0100",
        "requestType": "Flyer",
        "description": "Summer flavor flyer",
        "neededByDate": "2026-11-02",
        "fileName": "summer.png",
    }


@pytest.fixture
def price_change_data():
    return {
        "storeName": ["Yogurtland - Downtown LA", "Yogurtland - Irvine"],
        "managerName": "Sam Ortiz",
        "managerEmail": "sam@example.com",
        "priceChangeRequest": "InStore",
        "effectiveDate": "2026-12-01",
        "popNeeded": "Yes",
        "description": "Per-ounce price update",
        "currentPrice": "0.69",
        "updatedPrice": "0.75",
    }


@pytest.fixture
def weekly_hours():
    return [
        {"day": day, "startTime": "10:00", "endTime": "22:00"}
        for day in ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    ]


@pytest.fixture
def store_hours_data(weekly_hours):
    return {
        "storeName": "Yogurtland - Downtown LA",
        "managerName": "Sam Ortiz",
        "managerEmail": "sam@example.com",
        "changeType": "new_hours",
        "hours": weekly_hours,
    }


@pytest.fixture
def lsm_request_data():
    return {
        "storeLocation": ["Yogurtland - Downtown LA"],
        "contactName": "Dana Lee",
        "contactEmail": "dana@example.com",
        "lsmTypes": ["Print Ad", "Direct Mail"],
        "desiredMessage": "Buy one get one free",
        "color": ["4-color"],
        "fileType": ["PDF"],
        "artDueDate": "2026-11-15",
    }
