"""
Preview globals.

A theme is rendered without a store backend, so the storefront objects
(shop, request, routes, products, cart, ...) are synthesized once per engine
from the configuration and the theme settings. They are read-only inputs of
every render pass.
"""

from __future__ import annotations

import html
from typing import Any, Dict, List, Optional

from ..config import EngineConfig

SHOP_NAME = "My Store"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x400?text=Product"


def _product(product_id: int, index: int, price: int, compare_at_price: Optional[int]) -> Dict[str, Any]:
    title = f"Sample Product {index}"
    handle = f"sample-product-{index}"
    image = {"src": PLACEHOLDER_IMAGE, "alt": title, "width": 400, "height": 400}
    variant = {
        "id": product_id * 10 + 1,
        "title": "Default",
        "price": price,
        "compare_at_price": compare_at_price,
        "available": True,
        "inventory_quantity": 10,
    }
    return {
        "id": product_id,
        "title": title,
        "handle": handle,
        "url": f"/products/{handle}",
        "price": price,
        "price_min": price,
        "price_max": price,
        "compare_at_price": compare_at_price,
        "compare_at_price_min": compare_at_price,
        "compare_at_price_max": compare_at_price,
        "available": True,
        "featured_image": image,
        "image": image,
        "images": [image],
        "media": [dict(image, media_type="image", preview_image=image)],
        "variants": [variant],
        "selected_or_first_available_variant": variant,
        "has_only_default_variant": True,
        "description": "This is a sample product for preview purposes.",
        "vendor": "Sample Vendor",
        "type": "Sample Type",
        "tags": ["sample", "preview"],
        "options": [],
    }


def mock_products() -> List[Dict[str, Any]]:
    return [
        _product(1001, 1, 1999, 2499),
        _product(1002, 2, 2499, None),
        _product(1003, 3, 999, None),
        _product(1004, 4, 4999, 5999),
    ]


def mock_collections(products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "id": 2001,
            "title": "Featured",
            "handle": "featured",
            "url": "/collections/featured",
            "description": "Featured products",
            "products": products,
            "products_count": len(products),
            "all_products_count": len(products),
            "image": None,
        },
        {
            "id": 2002,
            "title": "All",
            "handle": "all",
            "url": "/collections/all",
            "description": "",
            "products": products,
            "products_count": len(products),
            "all_products_count": len(products),
            "image": None,
        },
    ]


def mock_linklists() -> Dict[str, Any]:
    def link(title: str, url: str) -> Dict[str, Any]:
        return {"title": title, "url": url, "active": False, "links": []}

    main_menu = {
        "handle": "main-menu",
        "title": "Main menu",
        "links": [
            link("Home", "/"),
            link("Catalog", "/collections/all"),
            link("Contact", "/pages/contact"),
        ],
    }
    footer = {
        "handle": "footer",
        "title": "Footer menu",
        "links": [link("Search", "/search"), link("About Us", "/pages/about-us")],
    }
    return {"main-menu": main_menu, "footer": footer}


def build_content_for_header(shop_name: str, page_title: str) -> str:
    """Head metadata injected into the layout as content_for_header."""
    title = f"{page_title} - {shop_name}" if page_title else shop_name
    return (
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{html.escape(title)}</title>"
    )


def build_preview_globals(
    config: EngineConfig,
    theme_settings: Dict[str, Any],
    locale: str = "en",
) -> Dict[str, Any]:
    """
    Storefront objects for preview rendering.

    Args:
        config: Engine configuration (shop domain, currency, design mode)
        theme_settings: Merged theme settings exposed as ``settings``
        locale: ISO code of the active locale
    """
    products = mock_products()
    collections = mock_collections(products)
    linklists = mock_linklists()
    language = {"iso_code": locale, "name": locale, "root_url": "/"}

    return {
        "shop": {
            "name": SHOP_NAME,
            "url": f"https://{config.shop_domain}",
            "domain": config.shop_domain,
            "permanent_domain": config.shop_domain,
            "currency": config.currency,
            "locale": locale,
            "money_format": config.money_format,
            "enabled_payment_types": ["visa", "master", "american_express", "paypal"],
        },
        "request": {
            "path": "/",
            "host": config.shop_domain,
            "locale": language,
            "design_mode": config.design_mode,
            "page_type": "index",
        },
        "routes": {
            "root_url": "/",
            "cart_url": "/cart",
            "cart_add_url": "/cart/add",
            "account_url": "/account",
            "account_login_url": "/account/login",
            "account_register_url": "/account/register",
            "search_url": "/search",
            "collections_url": "/collections",
            "all_products_collection_url": "/collections/all",
        },
        "localization": {
            "available_languages": [language],
            "language": language,
            "available_countries": [],
            "country": {"iso_code": "US", "name": "United States", "currency": {"iso_code": config.currency}},
        },
        "product": products[0],
        "products": products,
        "all_products": {product["handle"]: product for product in products},
        "collection": collections[0],
        "collections": collections,
        "cart": {
            "item_count": 2,
            "items": [
                {"product": products[0], "quantity": 1, "line_price": products[0]["price"]},
                {"product": products[1], "quantity": 1, "line_price": products[1]["price"]},
            ],
            "total_price": products[0]["price"] + products[1]["price"],
            "currency": {"iso_code": config.currency},
        },
        "customer": None,
        "linklists": linklists,
        "pages": [
            {"title": "About Us", "handle": "about-us", "url": "/pages/about-us"},
            {"title": "Contact", "handle": "contact", "url": "/pages/contact"},
        ],
        "blogs": [{"title": "News", "handle": "news", "url": "/blogs/news", "articles": []}],
        "settings": theme_settings,
        "page_title": "Home",
        "canonical_url": f"https://{config.shop_domain}/",
    }


__all__ = [
    "SHOP_NAME",
    "build_preview_globals",
    "build_content_for_header",
    "mock_products",
    "mock_collections",
    "mock_linklists",
]
