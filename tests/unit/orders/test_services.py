"""Unit tests for OrderService.

Covers:
- Submission: validation, server-side total, item snapshots.
- Notification happens after storage and only on success.
- Status transitions accept any non-blank label.
- Queries.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from modules.orders.exceptions import InvalidOrder, OrderNotFound, OrderStorageError
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

pytestmark = pytest.mark.unit


@pytest.fixture()
def notifier():
    return MagicMock()


@pytest.fixture()
def service(notifier):
    return OrderService(order_repository=OrderDjangoRepository(), notifier=notifier)


def _submit(service, order_payload, **overrides):
    data = dict(order_payload)
    data.update(overrides)
    return service.submit(
        customer=data["customer"],
        items=data["items"],
        shipping=data["shipping"],
        payment_method=data.get("paymentMethod"),
        subtotal=data.get("subtotal"),
    )


class TestSubmit:
    def test_persists_order_with_computed_total(self, service, order_payload):
        order = _submit(service, order_payload)

        stored = Order.objects.get(order_id=order.order_id)
        assert stored.subtotal == Decimal("100.00")
        assert stored.total == Decimal("112.50")
        assert stored.status == "pending"
        assert stored.payment_method == "PayPal"
        assert stored.customer_phone == "555-0100"

    def test_client_total_is_ignored(self, service, order_payload):
        order_payload["total"] = "1.00"

        order = _submit(service, order_payload)

        assert order.total == Decimal("112.50")

    def test_items_are_snapshotted(self, service, order_payload):
        order = _submit(service, order_payload)

        [item] = order.items.all()
        assert item.product_id == "p1"
        assert item.unit_price == Decimal("50.00")
        assert item.quantity == 2
        assert item.category == "graphic-kit"
        assert (item.fitment_make, item.fitment_model, item.fitment_year) == (
            "KTM",
            "250 SXF",
            "2024",
        )

    def test_shipping_snapshot_is_stored(self, service, order_payload):
        order = _submit(service, order_payload)

        assert order.shipping["provider"] == "USPS"
        assert order.shipping["amount"] == "12.50"
        assert order.shipping["address"]["country"] == "US"

    def test_notifies_after_storage(self, service, notifier, order_payload):
        order = _submit(service, order_payload)

        notifier.notify.assert_called_once()
        notified = notifier.notify.call_args.args[0]
        assert notified.order_id == order.order_id

    def test_two_submissions_get_distinct_ids(self, service, order_payload):
        first = _submit(service, order_payload)
        second = _submit(service, order_payload)

        assert first.order_id != second.order_id
        assert Order.objects.count() == 2

    @pytest.mark.parametrize("missing", ["customer", "items", "shipping"])
    def test_missing_section_rejected(self, service, notifier, order_payload, missing):
        with pytest.raises(InvalidOrder, match="Missing required order fields"):
            _submit(service, order_payload, **{missing: None})

        notifier.notify.assert_not_called()
        assert Order.objects.count() == 0

    def test_blank_customer_email_rejected(self, service, order_payload):
        order_payload["customer"] = {"name": "Jane", "email": "  "}

        with pytest.raises(InvalidOrder):
            _submit(service, order_payload)

    def test_invalid_item_quantity_rejected(self, service, order_payload):
        order_payload["items"] = [{"id": "p1", "price": 10, "qty": 0}]

        with pytest.raises(InvalidOrder):
            _submit(service, order_payload)

    def test_negative_amounts_clamped_to_zero(self, service, order_payload):
        order_payload["shipping"] = dict(order_payload["shipping"], amount="-4")

        order = _submit(service, order_payload, subtotal="-10")

        assert order.subtotal == Decimal("0.00")
        assert order.total == Decimal("0.00")

    def test_storage_failure_skips_notification(self, notifier, order_payload):
        repository = MagicMock()
        repository.append.side_effect = OrderStorageError("disk full")
        service = OrderService(order_repository=repository, notifier=notifier)

        with pytest.raises(OrderStorageError):
            _submit(service, order_payload)

        notifier.notify.assert_not_called()

    def test_works_without_notifier(self, order_payload):
        service = OrderService(order_repository=OrderDjangoRepository())

        assert _submit(service, order_payload).order_id


class TestTransition:
    def test_accepts_any_label(self, service, order_payload):
        order = _submit(service, order_payload)

        updated = service.transition(order.order_id, "  awaiting paint  ")

        assert updated.status == "awaiting paint"
        assert Order.objects.get(order_id=order.order_id).status == "awaiting paint"

    def test_terminal_label_can_be_left(self, service, order_payload):
        order = _submit(service, order_payload)
        service.transition(order.order_id, "shipped")

        assert service.transition(order.order_id, "pending").status == "pending"

    @pytest.mark.parametrize("value", ["", "   ", None, 5])
    def test_blank_or_non_text_rejected(self, service, order_payload, value):
        order = _submit(service, order_payload)

        with pytest.raises(InvalidOrder):
            service.transition(order.order_id, value)

    def test_too_long_rejected(self, service, order_payload):
        order = _submit(service, order_payload)

        with pytest.raises(InvalidOrder):
            service.transition(order.order_id, "x" * 41)

    def test_unknown_order(self, service):
        with pytest.raises(OrderNotFound):
            service.transition("GRX-FFFFFFFF", "shipped")

    def test_does_not_notify(self, service, notifier, order_payload):
        order = _submit(service, order_payload)
        notifier.reset_mock()

        service.transition(order.order_id, "processing")

        notifier.notify.assert_not_called()


class TestQueries:
    def test_get_order(self, service, order_payload):
        order = _submit(service, order_payload)

        assert service.get_order(order.order_id).pk == order.pk

    def test_get_unknown_order(self, service):
        with pytest.raises(OrderNotFound):
            service.get_order("GRX-00000000")

    def test_list_filters_by_status(self, service, order_payload):
        first = _submit(service, order_payload)
        second = _submit(service, order_payload)
        service.transition(second.order_id, "shipped")

        assert [o.order_id for o in service.list_orders("pending")] == [first.order_id]
        assert len(service.list_orders()) == 2
