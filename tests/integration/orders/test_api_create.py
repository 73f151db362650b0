"""Integration tests for the order submission endpoint.

Covers:
- Success 200 with the server-computed total.
- Validation 400: missing sections, blank customer fields, bad items.
- Storage 503: nothing stored, nothing sent.
- Notifications: both e-mails go out; one failing never fails the order.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core import mail
from django.db import DatabaseError

from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


class TestCreateOrder:
    def test_returns_order_id_and_total(self, api_client, order_payload):
        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == "112.50"
        order = Order.objects.get(order_id=body["orderId"])
        assert order.total == Decimal("112.50")
        assert order.items.count() == 1

    def test_no_admin_token_needed(self, api_client, order_payload, settings):
        settings.ADMIN_SECRET = "something-else"

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 200

    def test_sends_owner_and_customer_emails(self, api_client, order_payload, settings):
        settings.OWNER_EMAIL = "owner@example.com"

        response = api_client.post(URL, order_payload, format="json")

        order_id = response.json()["orderId"]
        recipients = sorted(m.to[0] for m in mail.outbox)
        assert recipients == ["jane@example.com", "owner@example.com"]
        assert all(order_id in m.subject for m in mail.outbox)

    def test_owner_email_failure_does_not_fail_order(
        self, api_client, order_payload, settings
    ):
        settings.OWNER_EMAIL = "owner@example.com"

        with patch(
            "modules.notifications.mailer.send_owner_notification",
            side_effect=ConnectionRefusedError("smtp down"),
        ):
            response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 200
        assert [m.to for m in mail.outbox] == [["jane@example.com"]]
        assert Order.objects.filter(order_id=response.json()["orderId"]).exists()

    def test_broker_failure_does_not_fail_order(self, api_client, order_payload):
        with patch(
            "celery.app.task.Task.apply_async",
            side_effect=ConnectionError("broker down"),
        ):
            response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 200
        assert Order.objects.count() == 1

    @pytest.mark.parametrize("missing", ["customer", "items", "shipping"])
    def test_missing_section_returns_400(self, api_client, order_payload, missing):
        del order_payload[missing]

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required order fields."
        assert Order.objects.count() == 0
        assert mail.outbox == []

    def test_empty_items_returns_400(self, api_client, order_payload):
        order_payload["items"] = []

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400

    def test_blank_customer_name_returns_400(self, api_client, order_payload):
        order_payload["customer"]["name"] = "  "

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert "required" in response.json()["detail"]

    def test_zero_quantity_returns_400(self, api_client, order_payload):
        order_payload["items"][0]["qty"] = 0

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400

    def test_malformed_subtotal_counts_as_zero(self, api_client, order_payload):
        order_payload["subtotal"] = "not a number"

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 200
        assert response.json()["total"] == "12.50"

    @pytest.mark.parametrize("subtotal", ["1e12", "100000000", "1e40"])
    def test_oversized_subtotal_returns_400(self, api_client, order_payload, subtotal):
        order_payload["subtotal"] = subtotal

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert Order.objects.count() == 0
        assert mail.outbox == []

    def test_oversized_amounts_leave_order_list_readable(
        self, api_client, admin_client, order_payload
    ):
        order_payload["subtotal"] = "1e12"
        api_client.post(URL, order_payload, format="json")

        response = admin_client.get(URL)

        assert response.status_code == 200

    def test_oversized_shipping_amount_returns_400(self, api_client, order_payload):
        order_payload["shipping"]["amount"] = "123456789"

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_oversized_unit_price_returns_400(self, api_client, order_payload):
        order_payload["items"][0]["price"] = "1e9"

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400

    def test_total_over_limit_returns_400(self, api_client, order_payload):
        order_payload["subtotal"] = "99999999.99"
        order_payload["shipping"]["amount"] = "1.00"

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert "total" in response.json()["detail"]

    def test_huge_quantity_returns_400(self, api_client, order_payload):
        order_payload["items"][0]["qty"] = 2**40

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400

    @pytest.mark.parametrize(
        ("section", "field", "length"),
        [
            ("customer", "name", 201),
            ("customer", "email", 255),
            ("customer", "phone", 51),
        ],
    )
    def test_overlong_customer_field_returns_400(
        self, api_client, order_payload, section, field, length
    ):
        order_payload[section][field] = "x" * length

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert Order.objects.count() == 0

    @pytest.mark.parametrize(
        ("field", "length"),
        [("productId", 101), ("name", 256), ("category", 51), ("year", 21)],
    )
    def test_overlong_item_field_returns_400(
        self, api_client, order_payload, field, length
    ):
        order_payload["items"][0][field] = "x" * length

        response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 400
        assert Order.objects.count() == 0

    def test_storage_failure_returns_503(self, api_client, order_payload):
        with patch(
            "modules.orders.models.OrderItem.objects.bulk_create",
            side_effect=DatabaseError("disk I/O error"),
        ):
            response = api_client.post(URL, order_payload, format="json")

        assert response.status_code == 503
        assert response.json() == {"detail": "Failed to process order."}
        assert Order.objects.count() == 0
        assert mail.outbox == []


class TestCreateOrderThrottling:
    def test_order_creation_is_throttled(self, api_client, order_payload, settings):
        settings.OWNER_EMAIL = ""

        for _ in range(10):
            response = api_client.post(URL, order_payload, format="json")
            assert response.status_code == 200

        response = api_client.post(URL, order_payload, format="json")
        assert response.status_code == 429
