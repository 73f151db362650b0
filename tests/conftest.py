import pytest

from django.core.cache import cache

from rest_framework.test import APIClient

from modules.catalog.services import reset_catalog_cache

ADMIN_SECRET = "test-admin-secret"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _isolate_state(settings):
    """Fresh throttle counters and catalog cache for every test."""
    settings.ADMIN_SECRET = ADMIN_SECRET
    cache.clear()
    reset_catalog_cache()
    yield
    reset_catalog_cache()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def admin_client():
    """APIClient that sends the admin token on every request."""
    client = APIClient()
    client.credentials(HTTP_X_ADMIN_TOKEN=ADMIN_SECRET)
    return client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def shipping_selection():
    return {
        "provider": "USPS",
        "serviceLevel": "Priority Mail",
        "amount": "12.50",
        "currency": "USD",
        "address": {
            "name": "Jane Rider",
            "street1": "1 Track Rd",
            "city": "Austin",
            "state": "TX",
            "zip": "78701",
            "country": "US",
        },
    }


@pytest.fixture()
def order_payload(shipping_selection):
    """A valid submission: subtotal 100.00 + shipping 12.50."""
    return {
        "customer": {
            "name": "Jane Rider",
            "email": "jane@example.com",
            "phone": "555-0100",
        },
        "items": [
            {
                "id": "p1",
                "name": "KTM 250/350 SXF Stealth Kit",
                "price": 50,
                "qty": 2,
                "make": "KTM",
                "model": "250 SXF",
                "year": "2024",
                "category": "graphic-kit",
            }
        ],
        "shipping": shipping_selection,
        "paymentMethod": "PayPal",
        "subtotal": 100,
    }
