"""Shipping URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.shipping.views import QuoteView

urlpatterns = [
    path("quote/", QuoteView.as_view(), name="shipping_quote"),
]
