# anynow_store/bridge.py
"""
In-memory data bridge shared by the storefront and the admin panel.

The bridge keeps one list per collection and mirrors every change to the
key-value store. There is no locking across processes: each mutation
re-reads its collection from the store, applies the change and writes the
whole list back, so the last writer wins.
"""
import copy
import logging
import threading

from . import defaults
from .errors import FormError, NotFoundError
from .storage import local_store
from .utilities import _as_int, _matches, _next_id, _stamp, generate_slug

logger = logging.getLogger(__name__)

# collection key -> factory for its value when the store has none
COLLECTIONS = {
    "products": defaults.default_products,
    "categories": defaults.default_categories,
    "orders": defaults.default_orders,
    "users": list,
    "testimonials": list,
    "pan_products": list,
    "liquor_products": list,
}

SEEDED_ON_FIRST_RUN = ("products", "categories", "orders")

PENDING_STATUSES = ("pending", "new")


def _order_date(order):
    return str(order.get("orderDate") or order.get("date") or "")


def _order_total(order):
    value = order.get("totalAmount", order.get("total", 0))
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _in_stock(quantity):
    return (_as_int(quantity, 0) or 0) > 0


class DataBridge:
    def __init__(self, store=None):
        self.store = store or local_store
        self._lock = threading.RLock()
        self._data = {}

        first_run = self.store.get("products") is None
        for key in COLLECTIONS:
            self._data[key] = self._load(key)

        if first_run:
            for key in SEEDED_ON_FIRST_RUN:
                self._save(key)
            logger.info("Seeded empty store with default products, categories and orders")

    # --------------------------
    # Storage helpers
    # --------------------------

    def _load(self, key):
        value = self.store.get(key)
        if isinstance(value, list):
            return value
        if value is not None:
            logger.error("Ignoring %s in storage: expected a list, got %s", key, type(value).__name__)
        return COLLECTIONS[key]()

    def _save(self, key):
        return self.store.set(key, self._data[key])

    def refresh(self, key=None):
        """Reload one collection (or all) from the store. Returns False for unknown keys."""
        with self._lock:
            if key is None:
                for name in COLLECTIONS:
                    self._data[name] = self._load(name)
                return True
            if key not in COLLECTIONS:
                return False
            self._data[key] = self._load(key)
            return True

    def _items(self, key):
        return self._data[key]

    def _find(self, key, record_id):
        rid = _as_int(record_id)
        if rid is None:
            return None
        for item in self._data[key]:
            if item.get("id") == rid:
                return item
        return None

    def _require(self, key, record_id, message):
        item = self._find(key, record_id)
        if item is None:
            raise NotFoundError(message)
        return item

    def _snapshot(self, key):
        with self._lock:
            return copy.deepcopy(self._data[key])

    # --------------------------
    # Products
    # --------------------------

    def get_all_products(self):
        return self._snapshot("products")

    def get_product_by_id(self, product_id):
        with self._lock:
            item = self._find("products", product_id)
            return copy.deepcopy(item) if item else None

    def create_product(self, data):
        with self._lock:
            self.refresh("products")
            products = self._items("products")
            product = dict(data)
            product["id"] = _next_id(products)
            product["inStock"] = _in_stock(product.get("quantity"))
            product.setdefault("featured", False)
            products.append(product)
            self._save("products")
            logger.info("Product %s created (%s)", product["id"], product.get("name"))
            return copy.deepcopy(product)

    def update_product(self, product_id, data):
        with self._lock:
            self.refresh("products")
            product = self._require("products", product_id, "Product not found")
            product.update({k: v for k, v in data.items() if k != "id"})
            product["inStock"] = _in_stock(product.get("quantity"))
            self._save("products")
            return copy.deepcopy(product)

    def delete_product(self, product_id):
        with self._lock:
            self.refresh("products")
            product = self._require("products", product_id, "Product not found")
            self._items("products").remove(product)
            self._save("products")
            logger.info("Product %s deleted", product["id"])
            return True

    # --------------------------
    # Corner catalogs
    # --------------------------

    def _corner(self, slug):
        try:
            return defaults.CORNERS[slug]
        except KeyError:
            raise NotFoundError("Corner not found")

    def get_corner_products(self, slug):
        key, _ = self._corner(slug)
        return self._snapshot(key)

    def create_corner_product(self, slug, data):
        key, default_unit = self._corner(slug)
        with self._lock:
            self.refresh(key)
            items = self._items(key)
            product = dict(data)
            product["id"] = _next_id(items)
            product["category"] = slug
            product["inStock"] = True
            product.setdefault("featured", False)
            if not product.get("unit"):
                product["unit"] = default_unit
            items.append(product)
            self._save(key)
            return copy.deepcopy(product)

    def update_corner_product(self, slug, product_id, data):
        key, _ = self._corner(slug)
        with self._lock:
            self.refresh(key)
            product = self._require(key, product_id, "Product not found")
            product.update({k: v for k, v in data.items() if k not in ("id", "category")})
            self._save(key)
            return copy.deepcopy(product)

    def delete_corner_product(self, slug, product_id):
        key, _ = self._corner(slug)
        with self._lock:
            self.refresh(key)
            product = self._require(key, product_id, "Product not found")
            self._items(key).remove(product)
            self._save(key)
            return True

    # --------------------------
    # Categories
    # --------------------------

    def get_all_categories(self):
        return self._snapshot("categories")

    def get_category_by_slug(self, slug):
        with self._lock:
            for c in self._items("categories"):
                if c.get("slug") == slug:
                    return copy.deepcopy(c)
        return None

    def _slug_taken(self, slug, exclude_id=None):
        return any(
            c.get("slug") == slug and c.get("id") != exclude_id
            for c in self._items("categories")
        )

    def create_category(self, data):
        with self._lock:
            self.refresh("categories")
            categories = self._items("categories")
            category = dict(data)
            category["slug"] = category.get("slug") or generate_slug(category.get("name"))
            if self._slug_taken(category["slug"]):
                raise FormError("A category with this name already exists")
            category["id"] = _next_id(categories)
            categories.append(category)
            self._save("categories")
            logger.info("Category %s created (%s)", category["id"], category["slug"])
            return copy.deepcopy(category)

    def update_category(self, category_id, data):
        """Rename a category; products follow a slug change."""
        with self._lock:
            self.refresh("categories")
            category = self._require("categories", category_id, "Category not found")
            old_slug = category.get("slug")
            new_slug = data.get("slug") or old_slug
            if new_slug != old_slug and self._slug_taken(new_slug, exclude_id=category["id"]):
                raise FormError("A category with this name already exists")

            category.update({k: v for k, v in data.items() if k != "id"})
            category["slug"] = new_slug
            self._save("categories")

            if new_slug != old_slug:
                self.refresh("products")
                moved = 0
                for p in self._items("products"):
                    if p.get("category") == old_slug:
                        p["category"] = new_slug
                        moved += 1
                if moved:
                    self._save("products")
                logger.info("Category %s renamed %s -> %s (%d products moved)",
                            category["id"], old_slug, new_slug, moved)
            return copy.deepcopy(category)

    def delete_category(self, category_id):
        """Delete a category and every product filed under its slug. Returns the removed product count."""
        with self._lock:
            self.refresh("categories")
            category = self._require("categories", category_id, "Category not found")
            self._items("categories").remove(category)
            self._save("categories")

            self.refresh("products")
            slug = category.get("slug")
            before = len(self._items("products"))
            self._data["products"] = [p for p in self._items("products") if p.get("category") != slug]
            removed = before - len(self._data["products"])
            self._save("products")
            logger.info("Category %s deleted with %d products", slug, removed)
            return removed

    # --------------------------
    # Orders
    # --------------------------

    def get_all_orders(self):
        orders = self._snapshot("orders")
        return sorted(orders, key=_order_date, reverse=True)

    def get_order(self, order_id):
        with self._lock:
            item = self._find("orders", order_id)
            return copy.deepcopy(item) if item else None

    def add_order(self, order, numbering=None):
        with self._lock:
            self.refresh("orders")
            orders = self._items("orders")
            record = dict(order)
            record["id"] = _next_id(orders)
            if numbering is not None:
                record["orderNumber"] = numbering(record["id"])
            orders.append(record)
            self._save("orders")
            logger.info("Order %s placed (%s)", record["id"], record.get("orderNumber", ""))
            return copy.deepcopy(record)

    def update_order_status(self, order_id, status):
        status = str(status or "").strip()
        if not status:
            raise FormError("Status is required")
        with self._lock:
            self.refresh("orders")
            order = self._require("orders", order_id, "Order not found")
            order["status"] = status
            order["updatedAt"] = _stamp()
            self._save("orders")
            return copy.deepcopy(order)

    def get_order_stats(self):
        with self._lock:
            orders = self._items("orders")
            return {
                "totalOrders": len(orders),
                "totalRevenue": sum(_order_total(o) for o in orders),
                "pendingOrders": sum(
                    1 for o in orders if str(o.get("status") or "").lower() in PENDING_STATUSES
                ),
            }

    def get_orders_for_customer(self, customer_id):
        return [o for o in self.get_all_orders() if o.get("customerId") == customer_id]

    def get_user_total_orders(self, user_id):
        with self._lock:
            return sum(1 for o in self._items("orders") if o.get("customerId") == user_id)

    # --------------------------
    # Users
    # --------------------------

    def get_all_users(self):
        users = self._snapshot("users")
        return sorted(users, key=lambda u: str(u.get("signupDate") or ""), reverse=True)

    def search_users(self, query):
        return [u for u in self.get_all_users() if _matches(u, query, ("name", "email", "phone"))]

    def get_user(self, user_id):
        with self._lock:
            item = self._find("users", user_id)
            return copy.deepcopy(item) if item else None

    def find_user_by_email(self, email):
        email = str(email or "").strip().lower()
        with self._lock:
            self.refresh("users")
            for u in self._items("users"):
                if str(u.get("email") or "").lower() == email:
                    return copy.deepcopy(u)
        return None

    def register_user(self, record):
        with self._lock:
            self.refresh("users")
            users = self._items("users")
            user = dict(record)
            user["id"] = _next_id(users)
            now = _stamp()
            user.setdefault("signupDate", now)
            user.setdefault("isBlocked", False)
            user["updatedAt"] = now
            users.append(user)
            self._save("users")
            return copy.deepcopy(user)

    def record_login(self, user_id):
        with self._lock:
            self.refresh("users")
            user = self._require("users", user_id, "User not found")
            user["lastLogin"] = _stamp()
            self._save("users")
            return copy.deepcopy(user)

    def toggle_user_blocked(self, user_id):
        with self._lock:
            self.refresh("users")
            user = self._require("users", user_id, "User not found")
            user["isBlocked"] = not user.get("isBlocked", False)
            user["updatedAt"] = _stamp()
            self._save("users")
            return copy.deepcopy(user)

    # --------------------------
    # Testimonials
    # --------------------------

    def get_all_testimonials(self):
        items = self._snapshot("testimonials")
        return sorted(items, key=lambda t: str(t.get("createdAt") or ""), reverse=True)

    def get_approved_testimonials(self):
        return [t for t in self.get_all_testimonials() if t.get("isApproved")]

    def search_testimonials(self, query):
        fields = ("customerName", "customerEmail", "productName")
        return [t for t in self.get_all_testimonials() if _matches(t, query, fields)]

    def create_testimonial(self, data):
        with self._lock:
            self.refresh("testimonials")
            items = self._items("testimonials")
            now = _stamp()
            record = dict(data)
            record["id"] = _next_id(items)
            record["isApproved"] = False
            record.setdefault("orderDate", None)
            record["createdAt"] = now
            record["updatedAt"] = now
            items.append(record)
            self._save("testimonials")
            return copy.deepcopy(record)

    def toggle_testimonial_approval(self, testimonial_id):
        with self._lock:
            self.refresh("testimonials")
            item = self._require("testimonials", testimonial_id, "Testimonial not found")
            item["isApproved"] = not item.get("isApproved", False)
            item["updatedAt"] = _stamp()
            self._save("testimonials")
            return copy.deepcopy(item)

    def delete_testimonial(self, testimonial_id):
        with self._lock:
            self.refresh("testimonials")
            item = self._require("testimonials", testimonial_id, "Testimonial not found")
            self._items("testimonials").remove(item)
            self._save("testimonials")
            return True

    # --------------------------
    # Sample records
    # --------------------------

    SAMPLE_FACTORIES = {
        "order": ("orders", defaults.sample_order),
        "user": ("users", defaults.sample_user),
        "testimonial": ("testimonials", defaults.sample_testimonial),
    }

    def add_sample(self, kind):
        try:
            key, factory = self.SAMPLE_FACTORIES[kind]
        except KeyError:
            raise FormError(f"Unknown sample type: {kind}")
        with self._lock:
            self.refresh(key)
            items = self._items(key)
            record = factory()
            if self._find(key, record["id"]) is not None:
                record["id"] = _next_id(items)
            items.append(record)
            self._save(key)
            return copy.deepcopy(record)

    # --------------------------
    # Website data
    # --------------------------

    def get_website_data(self):
        with self._lock:
            products = self._items("products")
            grouped = {
                c.get("slug"): [copy.deepcopy(p) for p in products if p.get("category") == c.get("slug")]
                for c in self._items("categories")
            }
            categories = [
                {"name": c.get("name"), "slug": c.get("slug")} for c in self._items("categories")
            ]
            return {"products": grouped, "categories": categories}

    def get_featured_products(self):
        with self._lock:
            featured = []
            for key in ("products", "pan_products", "liquor_products"):
                featured.extend(copy.deepcopy(p) for p in self._items(key) if p.get("featured") is True)
            return featured

    def clear_all_data(self):
        """Drop products, categories and orders and restore their defaults."""
        with self._lock:
            for key in SEEDED_ON_FIRST_RUN:
                self.store.remove(key)
            for key in SEEDED_ON_FIRST_RUN:
                self._data[key] = COLLECTIONS[key]()
                self._save(key)
            logger.warning("Store cleared; defaults restored")
            return True


# --------------------------
# Singleton access
# --------------------------

_bridge = None
_bridge_lock = threading.Lock()


def get_bridge():
    global _bridge
    if _bridge is None:
        with _bridge_lock:
            if _bridge is None:
                _bridge = DataBridge()
    return _bridge


def peek_bridge():
    return _bridge


def reset_bridge():
    global _bridge
    with _bridge_lock:
        _bridge = None
