"""Catalog constants.

Dataset names, the spreadsheet tab backing each one, and the placeholder
catalog served while no spreadsheet is configured.
"""

from __future__ import annotations

from typing import Any, Dict, List

PRODUCTS = "products"
GALLERY = "gallery"

SHEET_TABS: Dict[str, str] = {
    PRODUCTS: "Products",
    GALLERY: "Gallery",
}

DEFAULT_GALLERY_ORDER = 999

PLACEHOLDER_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "p1",
        "name": "KTM 250/350 SXF Stealth Kit",
        "category": "graphic-kit",
        "make": "KTM",
        "model": "250/350 SXF",
        "year_from": 2023,
        "year_to": 2025,
        "price": 249.0,
        "sku": "GRX-KTM-SXF-2325",
        "image_url": "",
        "description": "Full graphic kit for KTM SXF, 3M laminate, UV rated.",
        "in_stock": True,
        "featured": True,
    },
    {
        "id": "p2",
        "name": "Husqvarna FE 350 Coyote Kit",
        "category": "graphic-kit",
        "make": "Husqvarna",
        "model": "FE 350",
        "year_from": 2023,
        "year_to": 2025,
        "price": 249.0,
        "sku": "GRX-HQV-FE350-2325",
        "image_url": "",
        "description": "Enduro graphic kit with Coyote Tan colourway.",
        "in_stock": True,
        "featured": True,
    },
    {
        "id": "p3",
        "name": "Yamaha YZ250F Acid Kit",
        "category": "graphic-kit",
        "make": "Yamaha",
        "model": "YZ250F",
        "year_from": 2024,
        "year_to": 2025,
        "price": 229.0,
        "sku": "GRX-YAM-YZ250F-2425",
        "image_url": "",
        "description": "Acid Lime signature kit for Yamaha YZ250F.",
        "in_stock": True,
        "featured": True,
    },
    {
        "id": "p4",
        "name": "Honda CRF 450R Stealth Kit",
        "category": "graphic-kit",
        "make": "Honda",
        "model": "CRF 450R",
        "year_from": 2021,
        "year_to": 2024,
        "price": 229.0,
        "sku": "GRX-HON-CRF450R-2124",
        "image_url": "",
        "description": "Stealth Charcoal full kit for Honda CRF 450R.",
        "in_stock": True,
        "featured": True,
    },
    {
        "id": "p5",
        "name": "KTM Gripper Seat Cover",
        "category": "seat-cover",
        "make": "KTM",
        "model": "250/350 SXF",
        "year_from": 2023,
        "year_to": 2025,
        "price": 89.0,
        "sku": "GRX-SC-KTM-SXF-2325",
        "image_url": "",
        "description": "Gripper seat cover matched to Griffix graphic kits.",
        "in_stock": True,
        "featured": False,
    },
    {
        "id": "p6",
        "name": "Universal Number Plate Kit",
        "category": "number-plate",
        "make": "",
        "model": "Universal",
        "year_from": None,
        "year_to": None,
        "price": 49.0,
        "sku": "GRX-NP-UNI",
        "image_url": "",
        "description": "Custom printed number plates, set of 3.",
        "in_stock": True,
        "featured": False,
    },
]

PLACEHOLDER_GALLERY: List[Dict[str, Any]] = [
    {
        "id": "g1",
        "tab": "our-designs",
        "title": "Stealth KTM Build",
        "bike_make": "KTM",
        "bike_model": "EXC 300",
        "image_url": "",
        "customer_name": "",
        "featured": True,
        "order": 1,
    },
    {
        "id": "g2",
        "tab": "our-designs",
        "title": "Coyote Husqvarna",
        "bike_make": "Husqvarna",
        "bike_model": "TE 300i",
        "image_url": "",
        "customer_name": "",
        "featured": True,
        "order": 2,
    },
    {
        "id": "g3",
        "tab": "customer-builds",
        "title": "Jake's Race KTM",
        "bike_make": "KTM",
        "bike_model": "350 SXF",
        "image_url": "",
        "customer_name": "Jake K.",
        "featured": True,
        "order": 1,
    },
    {
        "id": "g4",
        "tab": "customer-builds",
        "title": "Sam's Woods Husqy",
        "bike_make": "Husqvarna",
        "bike_model": "FE 350",
        "image_url": "",
        "customer_name": "Sam R.",
        "featured": False,
        "order": 2,
    },
    {
        "id": "g5",
        "tab": "plastic-kits",
        "title": "KTM Full Plastics",
        "bike_make": "KTM",
        "bike_model": "250 SXF",
        "image_url": "",
        "customer_name": "",
        "featured": True,
        "order": 1,
    },
]
