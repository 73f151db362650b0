"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2, immutable
(``frozen=True``).  Field names accept the camelCase keys the storefront
sends as well as snake_case.

Money fields are parsed permissively: malformed or negative amounts
become ``0.00`` instead of failing the submission.  Amounts, quantities
and text that would not fit the order columns are rejected.

- ``CustomerDTO``: name and email required, phone optional.
- ``OrderItemDTO``: one cart line.
- ``ShippingSelectionDTO``: the quote the customer picked + address.
- ``SubmitOrderDTO``: the full submission; exposes the computed total.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from modules.core.money import ZERO, parse_amount, quantize, to_money
from modules.orders.constants import (
    CATEGORY_MAX_LENGTH,
    CUSTOMER_EMAIL_MAX_LENGTH,
    CUSTOMER_NAME_MAX_LENGTH,
    CUSTOMER_PHONE_MAX_LENGTH,
    DEFAULT_PAYMENT_METHOD,
    FITMENT_MAX_LENGTH,
    FITMENT_YEAR_MAX_LENGTH,
    ITEM_NAME_MAX_LENGTH,
    MAX_AMOUNT,
    MAX_ITEM_QUANTITY,
    PAYMENT_METHOD_MAX_LENGTH,
    PRODUCT_ID_MAX_LENGTH,
)


def _bounded_money(value: Any) -> Decimal:
    amount = parse_amount(value)
    if amount is not None and amount > MAX_AMOUNT:
        raise ValueError(f"Amount must not exceed {MAX_AMOUNT}.")
    return to_money(amount)


class CustomerDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=CUSTOMER_NAME_MAX_LENGTH)
    email: str = Field(max_length=CUSTOMER_EMAIL_MAX_LENGTH)
    phone: Optional[str] = Field(None, max_length=CUSTOMER_PHONE_MAX_LENGTH)

    @field_validator("name", "email")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Customer name and email are required.")
        return v


class OrderItemDTO(BaseModel):
    """A cart line as submitted.  ``unit_price`` is never negative."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: str = Field(
        "",
        max_length=PRODUCT_ID_MAX_LENGTH,
        validation_alias=AliasChoices("productId", "product_id", "id", "sku"),
    )
    name: str = Field("", max_length=ITEM_NAME_MAX_LENGTH)
    unit_price: Decimal = Field(
        ZERO, validation_alias=AliasChoices("price", "unitPrice", "unit_price")
    )
    quantity: int = Field(
        1, le=MAX_ITEM_QUANTITY, validation_alias=AliasChoices("quantity", "qty")
    )
    make: Optional[str] = Field(None, max_length=FITMENT_MAX_LENGTH)
    model: Optional[str] = Field(None, max_length=FITMENT_MAX_LENGTH)
    year: Optional[str] = Field(None, max_length=FITMENT_YEAR_MAX_LENGTH)
    category: Optional[str] = Field(None, max_length=CATEGORY_MAX_LENGTH)

    @field_validator("unit_price", mode="before")
    @classmethod
    def parse_price(cls, v: Any) -> Decimal:
        return _bounded_money(v)

    @field_validator("product_id", "make", "model", "year", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


class ShippingSelectionDTO(BaseModel):
    """Snapshot of the chosen quote; ``amount`` is the marked-up price."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    provider: str = ""
    service_level: str = Field(
        "",
        validation_alias=AliasChoices("serviceLevel", "servicelevel", "service_level"),
    )
    amount: Decimal = ZERO
    currency: str = ""
    address: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, v: Any) -> Decimal:
        return _bounded_money(v)

    def to_snapshot(self) -> Dict[str, Any]:
        """JSON-safe dict stored on the order."""
        return {
            "provider": self.provider,
            "serviceLevel": self.service_level,
            "amount": str(self.amount),
            "currency": self.currency,
            "address": dict(self.address),
        }


class SubmitOrderDTO(BaseModel):
    """Immutable DTO for order submissions.

    Validates:
    - customer name and email are present.
    - ``items`` contains at least one item.
    - ``shipping`` is present.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer: CustomerDTO
    items: List[OrderItemDTO]
    shipping: ShippingSelectionDTO
    payment_method: str = Field(
        DEFAULT_PAYMENT_METHOD,
        max_length=PAYMENT_METHOD_MAX_LENGTH,
        validation_alias=AliasChoices("paymentMethod", "payment_method"),
    )
    subtotal: Decimal = ZERO

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[OrderItemDTO]) -> List[OrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @field_validator("payment_method", mode="before")
    @classmethod
    def default_payment_method(cls, v: Any) -> str:
        if v is None or not str(v).strip():
            return DEFAULT_PAYMENT_METHOD
        return str(v).strip()

    @field_validator("subtotal", mode="before")
    @classmethod
    def parse_subtotal(cls, v: Any) -> Decimal:
        return _bounded_money(v)

    @model_validator(mode="after")
    def total_must_fit(self) -> "SubmitOrderDTO":
        if self.total > MAX_AMOUNT:
            raise ValueError(f"Order total must not exceed {MAX_AMOUNT}.")
        return self

    @property
    def total(self) -> Decimal:
        """Authoritative total: subtotal plus the quoted shipping amount."""
        return quantize(self.subtotal + self.shipping.amount)
