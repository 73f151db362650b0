"""Catalog URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.catalog.views import CatalogRefreshView, GalleryListView, ProductListView

urlpatterns = [
    path("catalog/products/", ProductListView.as_view(), name="catalog_products"),
    path("catalog/gallery/", GalleryListView.as_view(), name="catalog_gallery"),
    path("catalog/refresh/", CatalogRefreshView.as_view(), name="catalog_refresh"),
]
