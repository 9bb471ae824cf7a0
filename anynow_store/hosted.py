# anynow_store/hosted.py
"""
Client for the hosted catalog backend (a PostgREST-style table API).

Only products and categories live there; rows are mapped to the record
shape the rest of the store uses.
"""
import logging

import requests

from .conf import store_setting
from .errors import HostedBackendError

logger = logging.getLogger(__name__)


def map_product_row(row):
    joined = row.get("categories") or {}
    try:
        stock = int(row.get("stock_quantity") or 0)
    except (TypeError, ValueError):
        stock = 0
    return {
        "id": row.get("id"),
        "name": row.get("name") or "",
        "description": row.get("description") or "",
        "price": row.get("price") or 0,
        "unit": row.get("unit") or "",
        "image": row.get("image_url") or "",
        "quantity": stock,
        "inStock": stock > 0,
        "discount": row.get("discount_percentage") or 0,
        "featured": bool(row.get("featured", False)),
        "category": joined.get("slug") if isinstance(joined, dict) else None,
        "categoryName": joined.get("name") if isinstance(joined, dict) else None,
    }


def map_category_row(row):
    return {"id": row.get("id"), "name": row.get("name") or "", "slug": row.get("slug") or ""}


class HostedCatalogClient:
    def __init__(self, base_url, api_key, timeout=10.0, session=None):
        if not base_url:
            raise HostedBackendError("Hosted backend URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls):
        return cls(
            store_setting("HOSTED_URL"),
            store_setting("HOSTED_KEY"),
            timeout=float(store_setting("HOSTED_TIMEOUT")),
        )

    def _headers(self):
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def _select(self, table, params):
        endpoint = f"{self.base_url}/rest/v1/{table}"
        try:
            resp = self.session.get(endpoint, params=params, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Hosted backend query on %s failed: %s", table, e)
            raise HostedBackendError(f"Could not load {table} from hosted backend") from e

        if not isinstance(data, list):
            logger.error("Hosted backend returned %s for %s, expected a list", type(data).__name__, table)
            raise HostedBackendError(f"Unexpected response for {table}")
        return data

    def list_products(self):
        rows = self._select("products", {"select": "*,categories(slug,name)", "order": "name.asc"})
        return [map_product_row(r) for r in rows if isinstance(r, dict)]

    def list_categories(self):
        rows = self._select("categories", {"select": "*", "order": "name.asc"})
        return [map_category_row(r) for r in rows if isinstance(r, dict)]
