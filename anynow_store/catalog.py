# anynow_store/catalog.py
"""
Storefront reads: the grouped catalog, featured items, search and sorting.

The storefront reads the store directly rather than through the bridge, so
a catalog written by another process shows up on the next read.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal

from . import defaults
from .conf import catalog_source
from .hosted import HostedCatalogClient
from .storage import local_store
from .utilities import _as_int, _to_decimal, _to_number

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("popular", "price-low", "price-high")


def fetch_admin_data(store=None):
    """Products grouped by category slug, or the fallback catalog."""
    store = store or local_store
    products = store.get("products")
    categories = store.get("categories")
    if not isinstance(products, list) or not isinstance(categories, list):
        logger.info("Catalog missing from storage; serving fallback data")
        return defaults.fallback_website_data()

    # keyed by category; products whose slug matches no category are left out
    grouped = {
        c.get("slug"): [p for p in products if p.get("category") == c.get("slug")]
        for c in categories
    }
    return {
        "products": grouped,
        "categories": [{"name": c.get("name"), "slug": c.get("slug")} for c in categories],
    }


def fetch_featured_products(store=None):
    store = store or local_store
    featured = []
    for key in ("products", "pan_products", "liquor_products"):
        items = store.get(key)
        if isinstance(items, list):
            featured.extend(p for p in items if p.get("featured") is True)
    return featured


def filter_products(products, search="", category="all"):
    q = str(search or "").strip().lower()
    out = []
    for p in products:
        if category and category != "all" and p.get("category") != category:
            continue
        if q and q not in str(p.get("name") or "").lower() and q not in str(p.get("description") or "").lower():
            continue
        out.append(p)
    return out


def sort_products(products, sort_by="popular"):
    if sort_by == "price-low":
        return sorted(products, key=lambda p: float(p.get("price") or 0))
    if sort_by == "price-high":
        return sorted(products, key=lambda p: float(p.get("price") or 0), reverse=True)
    return list(products)


def discounted_price(product):
    price = _to_decimal(product.get("price"))
    discount = _to_decimal(product.get("discount"))
    if discount > 0:
        return _to_number((price * (1 - discount / 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return _to_number(price)


def all_products(data=None):
    data = data or fetch_admin_data()
    return [p for items in data["products"].values() for p in items]


def find_product(product_id, data=None):
    pid = _as_int(product_id)
    if pid is None:
        return None
    for p in all_products(data):
        if p.get("id") == pid:
            return p
    return None


def get_category_products(slug, store=None):
    store = store or local_store
    if slug in defaults.CORNERS:
        key, _ = defaults.CORNERS[slug]
        items = store.get(key)
        return items if isinstance(items, list) else []
    return fetch_admin_data(store)["products"].get(slug) or []


# --------------------------
# Catalog source switch
# --------------------------

def list_products(search="", category="all"):
    """Product listing for the all-products page, from the configured source."""
    if catalog_source() == "hosted":
        products = HostedCatalogClient.from_settings().list_products()
    else:
        products = sorted(all_products(), key=lambda p: str(p.get("name") or ""))
    return filter_products(products, search, category)


def list_categories():
    if catalog_source() == "hosted":
        return HostedCatalogClient.from_settings().list_categories()
    categories = local_store.get("categories")
    if not isinstance(categories, list):
        categories = defaults.fallback_website_data()["categories"]
    return sorted(categories, key=lambda c: str(c.get("name") or ""))
