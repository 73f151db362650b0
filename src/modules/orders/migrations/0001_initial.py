import decimal

import django.core.validators
import django.db.models.deletion
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "order_id",
                    models.CharField(editable=False, max_length=32, unique=True),
                ),
                ("status", models.CharField(default="pending", max_length=40)),
                ("customer_name", models.CharField(max_length=200)),
                ("customer_email", models.CharField(max_length=254)),
                (
                    "customer_phone",
                    models.CharField(blank=True, default="", max_length=50),
                ),
                ("shipping", models.JSONField(default=dict)),
                (
                    "payment_method",
                    models.CharField(default="Not specified", max_length=100),
                ),
                (
                    "subtotal",
                    models.DecimalField(
                        decimal_places=2, default=decimal.Decimal("0.00"), max_digits=10
                    ),
                ),
                (
                    "total",
                    models.DecimalField(
                        decimal_places=2, default=decimal.Decimal("0.00"), max_digits=10
                    ),
                ),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["status"], name="orders_status_idx"),
                    models.Index(fields=["-created_at"], name="orders_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("product_id", models.CharField(blank=True, default="", max_length=100)),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2, default=decimal.Decimal("0.00"), max_digits=10
                    ),
                ),
                (
                    "quantity",
                    models.PositiveIntegerField(
                        default=1,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("category", models.CharField(blank=True, default="", max_length=50)),
                (
                    "fitment_make",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                (
                    "fitment_model",
                    models.CharField(blank=True, default="", max_length=100),
                ),
                (
                    "fitment_year",
                    models.CharField(blank=True, default="", max_length=20),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "db_table": "order_items",
                "ordering": ["created_at", "id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity__gte", 1)),
                        name="order_items_quantity_positive",
                    )
                ],
            },
        ),
    ]
