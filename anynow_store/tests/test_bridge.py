# anynow_store/tests/test_bridge.py

import json

from anynow_store.bridge import DataBridge, get_bridge, peek_bridge, reset_bridge
from anynow_store.errors import FormError, NotFoundError
from anynow_store.models import StoredValue
from anynow_store.storage import local_store

from .base import StoreTestCase


class BridgeSeedingTests(StoreTestCase):
    """
    First-run behaviour.

    GUARANTEES:
    - An empty store is seeded with products, categories and orders
    - An initialized store is never reseeded
    """

    def test_empty_store_is_seeded(self):
        bridge = get_bridge()
        self.assertEqual(len(local_store.get("products")), 5)
        self.assertEqual(len(local_store.get("categories")), 6)
        self.assertEqual(len(local_store.get("orders")), 2)
        self.assertEqual(bridge.get_all_users(), [])
        self.assertIsNone(local_store.get("users"))

    def test_existing_store_is_not_reseeded(self):
        local_store.set("products", [{"id": 9, "name": "Ghee", "category": "dairy-bakery", "quantity": 1}])
        bridge = DataBridge()
        self.assertEqual([p["id"] for p in bridge.get_all_products()], [9])
        self.assertIsNone(local_store.get("orders"))
        # orders fall back to defaults in memory only
        self.assertEqual(len(bridge.get_all_orders()), 2)

    def test_singleton_access(self):
        self.assertIsNone(peek_bridge())
        bridge = get_bridge()
        self.assertIs(get_bridge(), bridge)
        self.assertIs(peek_bridge(), bridge)
        reset_bridge()
        self.assertIsNone(peek_bridge())


class BridgeProductTests(StoreTestCase):
    """
    Product CRUD.

    GUARANTEES:
    - New ids are max existing id + 1
    - inStock always follows quantity
    - Missing ids raise NotFoundError
    """

    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_create_product_assigns_next_id_and_stock_flag(self):
        product = self.bridge.create_product(
            {"name": "Mango", "category": "fruits-vegetables", "price": 150, "quantity": 0}
        )
        self.assertEqual(product["id"], 6)
        self.assertFalse(product["inStock"])
        self.assertFalse(product["featured"])
        self.assertEqual(local_store.get("products")[-1]["name"], "Mango")

    def test_create_product_in_empty_catalog_starts_at_one(self):
        local_store.set("products", [])
        self.bridge.refresh("products")
        product = self.bridge.create_product({"name": "Rice", "category": "instant-food", "quantity": 4})
        self.assertEqual(product["id"], 1)
        self.assertTrue(product["inStock"])

    def test_update_product_merges_and_recomputes_stock(self):
        updated = self.bridge.update_product(1, {"quantity": 0})
        self.assertEqual(updated["price"], 120)
        self.assertEqual(updated["name"], "Fresh Apples")
        self.assertFalse(updated["inStock"])

        updated = self.bridge.update_product("1", {"price": 99})
        self.assertEqual(updated["price"], 99)
        self.assertFalse(updated["inStock"])

    def test_update_missing_product_raises(self):
        with self.assertRaisesMessage(NotFoundError, "Product not found"):
            self.bridge.update_product(404, {"price": 1})

    def test_delete_product(self):
        self.bridge.delete_product(2)
        self.assertIsNone(self.bridge.get_product_by_id(2))
        with self.assertRaisesMessage(NotFoundError, "Product not found"):
            self.bridge.delete_product(2)

    def test_get_product_by_unparsable_id_is_none(self):
        self.assertIsNone(self.bridge.get_product_by_id("abc"))

    def test_returned_records_are_copies(self):
        products = self.bridge.get_all_products()
        products[0]["name"] = "Changed"
        self.assertEqual(self.bridge.get_product_by_id(1)["name"], "Fresh Apples")


class BridgeCornerTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_corner_product_gets_corner_category_and_default_unit(self):
        product = self.bridge.create_corner_product("liquor-corner", {"name": "Red Wine", "price": 900})
        self.assertEqual(product["id"], 1)
        self.assertEqual(product["category"], "liquor-corner")
        self.assertEqual(product["unit"], "bottle")
        self.assertTrue(product["inStock"])
        self.assertEqual(local_store.get("liquor_products")[0]["name"], "Red Wine")

    def test_corner_update_cannot_move_category(self):
        self.bridge.create_corner_product("pan-corner", {"name": "Meetha Paan", "price": 30})
        updated = self.bridge.update_corner_product("pan-corner", 1, {"price": 35, "category": "household"})
        self.assertEqual(updated["price"], 35)
        self.assertEqual(updated["category"], "pan-corner")

    def test_unknown_corner_raises(self):
        with self.assertRaises(NotFoundError):
            self.bridge.get_corner_products("tea-corner")


class BridgeCategoryTests(StoreTestCase):
    """
    Category lifecycle.

    GUARANTEES:
    - Deleting a category deletes its products by slug
    - Renaming a slug moves its products
    """

    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_create_category_generates_slug(self):
        category = self.bridge.create_category({"name": "Baby Care & Toys"})
        self.assertEqual(category["id"], 7)
        self.assertEqual(category["slug"], "baby-care-toys")

    def test_duplicate_slug_is_rejected(self):
        with self.assertRaises(FormError):
            self.bridge.create_category({"name": "Household", "slug": "household"})

    def test_delete_category_cascades_to_products(self):
        removed = self.bridge.delete_category(1)
        self.assertEqual(removed, 3)
        slugs = {p["category"] for p in local_store.get("products")}
        self.assertEqual(slugs, {"dairy-bakery"})
        self.assertIsNone(self.bridge.get_category_by_slug("fruits-vegetables"))

    def test_delete_missing_category_raises(self):
        with self.assertRaisesMessage(NotFoundError, "Category not found"):
            self.bridge.delete_category(99)

    def test_slug_change_moves_products(self):
        category = self.bridge.update_category(2, {"name": "Dairy", "slug": "dairy"})
        self.assertEqual(category["slug"], "dairy")
        moved = [p["id"] for p in self.bridge.get_all_products() if p["category"] == "dairy"]
        self.assertEqual(moved, [4, 5])


class BridgeOrderTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_stats_handle_legacy_orders(self):
        stats = self.bridge.get_order_stats()
        self.assertEqual(stats["totalOrders"], 2)
        self.assertEqual(stats["totalRevenue"], 770)
        self.assertEqual(stats["pendingOrders"], 1)

    def test_new_orders_count_as_pending(self):
        self.bridge.add_order({"status": "New", "totalAmount": 100, "orderDate": "2024-02-01T10:00:00"})
        stats = self.bridge.get_order_stats()
        self.assertEqual(stats["totalOrders"], 3)
        self.assertEqual(stats["totalRevenue"], 870)
        self.assertEqual(stats["pendingOrders"], 2)

    def test_orders_sorted_newest_first(self):
        self.bridge.add_order({"status": "New", "orderDate": "2024-02-01T10:00:00"})
        self.assertEqual([o["id"] for o in self.bridge.get_all_orders()], [3, 2, 1])

    def test_update_order_status_accepts_any_text(self):
        order = self.bridge.update_order_status(1, "Out for delivery")
        self.assertEqual(order["status"], "Out for delivery")
        self.assertIn("updatedAt", order)
        with self.assertRaises(FormError):
            self.bridge.update_order_status(1, "  ")
        with self.assertRaises(NotFoundError):
            self.bridge.update_order_status(50, "Accepted")

    def test_user_total_orders(self):
        self.bridge.add_order({"customerId": 7, "status": "New"})
        self.bridge.add_order({"customerId": 7, "status": "Delivered"})
        self.bridge.add_order({"customerId": 8, "status": "New"})
        self.assertEqual(self.bridge.get_user_total_orders(7), 2)
        self.assertEqual(len(self.bridge.get_orders_for_customer(8)), 1)


class BridgeUserAndTestimonialTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()
        self.bridge.register_user({"name": "Asha Rao", "email": "asha@example.com", "phone": "9876500000",
                                   "signupDate": "2024-01-01T00:00:00"})
        self.bridge.register_user({"name": "Vikram Das", "email": "vik@example.com", "phone": "9123400000",
                                   "signupDate": "2024-03-01T00:00:00"})

    def test_users_newest_first_and_searchable(self):
        self.assertEqual([u["name"] for u in self.bridge.get_all_users()], ["Vikram Das", "Asha Rao"])
        self.assertEqual([u["id"] for u in self.bridge.search_users("ASHA")], [1])
        self.assertEqual([u["id"] for u in self.bridge.search_users("91234")], [2])
        self.assertEqual(len(self.bridge.search_users("")), 2)

    def test_toggle_user_blocked(self):
        self.assertTrue(self.bridge.toggle_user_blocked(1)["isBlocked"])
        self.assertFalse(self.bridge.toggle_user_blocked(1)["isBlocked"])

    def test_testimonials_start_unapproved_and_toggle(self):
        item = self.bridge.create_testimonial(
            {"customerName": "Asha Rao", "productName": "Fresh Milk", "rating": 4, "testimonial": "Great"}
        )
        self.assertFalse(item["isApproved"])
        self.assertEqual(self.bridge.get_approved_testimonials(), [])
        self.bridge.toggle_testimonial_approval(item["id"])
        self.assertEqual(len(self.bridge.get_approved_testimonials()), 1)
        self.assertEqual(len(self.bridge.search_testimonials("milk")), 1)
        self.bridge.delete_testimonial(item["id"])
        self.assertEqual(self.bridge.get_all_testimonials(), [])

    def test_add_sample_records(self):
        order = self.bridge.add_sample("order")
        self.assertEqual(order["status"], "New")
        self.assertEqual(order["totalAmount"], order["subtotal"] + 40)
        with self.assertRaises(FormError):
            self.bridge.add_sample("invoice")


class BridgeWebsiteDataTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_website_data_has_a_list_for_every_category(self):
        data = self.bridge.get_website_data()
        self.assertEqual([p["id"] for p in data["products"]["fruits-vegetables"]], [1, 2, 3])
        self.assertEqual(data["products"]["personal-care"], [])
        self.assertEqual(data["categories"][0], {"name": "Fruits & Vegetables", "slug": "fruits-vegetables"})

    def test_featured_products_span_all_catalogs(self):
        self.bridge.update_product(1, {"featured": True})
        self.bridge.create_corner_product("pan-corner", {"name": "Paan", "price": 20, "featured": True})
        self.bridge.create_corner_product("liquor-corner", {"name": "Beer", "price": 150})
        names = [p["name"] for p in self.bridge.get_featured_products()]
        self.assertEqual(names, ["Fresh Apples", "Paan"])

    def test_clear_all_data_restores_defaults(self):
        self.bridge.delete_category(1)
        self.bridge.add_order({"status": "New"})
        self.bridge.clear_all_data()
        self.assertEqual(len(local_store.get("products")), 5)
        self.assertEqual(len(local_store.get("categories")), 6)
        self.assertEqual(len(self.bridge.get_all_orders()), 2)


class BridgeSynchronizationTests(StoreTestCase):
    """
    Store and bridge stay in step.

    GUARANTEES:
    - Writes through the store reach a live bridge immediately
    - Mutations re-read their collection first (last writer wins)
    """

    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_store_write_refreshes_live_bridge(self):
        local_store.set("products", [{"id": 40, "name": "Paneer", "category": "dairy-bakery", "quantity": 3}])
        self.assertEqual([p["id"] for p in self.bridge.get_all_products()], [40])

    def test_mutation_rereads_collection_written_elsewhere(self):
        """A write that bypasses signals (another process) is picked up by the next mutation."""
        external = [{"id": 70, "name": "Curd", "category": "dairy-bakery", "quantity": 2}]
        StoredValue.objects.filter(key="anynow_products").update(value=json.dumps(external))

        self.assertEqual(len(self.bridge.get_all_products()), 5)
        product = self.bridge.create_product({"name": "Butter", "category": "dairy-bakery", "quantity": 1})
        self.assertEqual(product["id"], 71)
        self.assertEqual([p["id"] for p in local_store.get("products")], [70, 71])

    def test_refresh_ignores_unknown_keys(self):
        self.assertFalse(self.bridge.refresh("cart_device"))
        self.assertTrue(self.bridge.refresh("orders"))
