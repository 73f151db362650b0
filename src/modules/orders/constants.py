"""Order domain constants.

Status is an open label: administrators may set any value, and no
transition is rejected.  ``OrderStatus`` only names the labels the
storefront itself uses.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    SHIPPED = "shipped", "Shipped"
    CANCELLED = "cancelled", "Cancelled"


STATUS_MAX_LENGTH = 40

DEFAULT_PAYMENT_METHOD = "Not specified"

ORDER_ID_MAX_RETRIES = 5
ORDER_ID_RANDOM_BYTES = 4

# Column limits on Order / OrderItem; submissions beyond them are rejected.
MAX_AMOUNT = Decimal("99999999.99")
MAX_ITEM_QUANTITY = 2_147_483_647
CUSTOMER_NAME_MAX_LENGTH = 200
CUSTOMER_EMAIL_MAX_LENGTH = 254
CUSTOMER_PHONE_MAX_LENGTH = 50
PAYMENT_METHOD_MAX_LENGTH = 100
PRODUCT_ID_MAX_LENGTH = 100
ITEM_NAME_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 50
FITMENT_MAX_LENGTH = 100
FITMENT_YEAR_MAX_LENGTH = 20
