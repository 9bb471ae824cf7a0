# anynow_store/tests/test_api.py

from unittest import mock

from django.test import override_settings
from rest_framework.test import APIClient

from anynow_store.bridge import get_bridge
from anynow_store.errors import HostedBackendError
from anynow_store.storage import local_store

from .base import FRONTEND_KEY, APITestCase, png_data_url

ADDRESS = {"name": "Home", "street": "12 Marine Drive", "area": "Churchgate", "city": "Mumbai",
           "pincode": "400020", "phone": "9876543210"}


class FrontendKeyTests(APITestCase):
    """
    Access control.

    GUARANTEES:
    - Every endpoint rejects requests without the frontend key
    """

    def test_missing_key_is_forbidden(self):
        client = APIClient()
        self.assertEqual(client.get("/api/website-data/").status_code, 403)
        self.assertEqual(client.get("/api/admin/show-products/").status_code, 403)

    def test_wrong_key_is_forbidden(self):
        client = APIClient()
        client.credentials(HTTP_X_FRONTEND_KEY="nope")
        self.assertEqual(client.get("/api/categories/").status_code, 403)


class AdminProductAPITests(APITestCase):
    def setUp(self):
        super().setUp()
        get_bridge()

    def test_create_edit_delete_product(self):
        res = self.client.post("/api/admin/save-product/", {
            "name": "Mango", "category": "fruits-vegetables", "price": "150", "quantity": "10",
            "discount": "5", "unit": "kg", "image": png_data_url(),
        }, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["message"], "Product added successfully!")
        product_id = res.data["product"]["id"]
        self.assertEqual(product_id, 6)
        self.assertTrue(res.data["product"]["inStock"])

        res = self.client.put(f"/api/admin/edit-product/{product_id}/", {"quantity": 0}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["message"], "Product updated successfully!")
        self.assertFalse(res.data["product"]["inStock"])

        res = self.client.delete(f"/api/admin/delete-product/{product_id}/")
        self.assertEqual(res.status_code, 200)
        res = self.client.delete(f"/api/admin/delete-product/{product_id}/")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"], "Product not found")

    def test_invalid_image_is_rejected(self):
        res = self.client.post("/api/admin/save-product/", {
            "name": "Mango", "category": "fruits-vegetables", "price": 150,
            "image": png_data_url(mime="image/gif"),
        }, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"], "Please upload a valid image file (JPG, PNG, or WEBP)")

    def test_unknown_category_is_rejected(self):
        res = self.client.post("/api/admin/save-product/", {"name": "Toy", "category": "toys", "price": 10},
                               format="json")
        self.assertEqual(res.status_code, 400)

    def test_edit_cannot_move_product_to_unknown_category(self):
        res = self.client.put("/api/admin/edit-product/1/", {"category": "ghost"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"], "Category not found")
        res = self.client.put("/api/admin/edit-product/1/", {"category": ""}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(get_bridge().get_product_by_id(1)["category"], "fruits-vegetables")

        res = self.client.put("/api/admin/edit-product/1/", {"category": "dairy-bakery"}, format="json")
        self.assertEqual(res.status_code, 200)
        website = self.client.get("/api/website-data/").data
        self.assertIn(1, [p["id"] for p in website["products"]["dairy-bakery"]])

    def test_non_finite_numbers_are_bad_requests(self):
        for payload in ({"price": "NaN"}, {"price": "Infinity"}):
            res = self.client.post("/api/admin/save-product/",
                                   {"name": "Mango", "category": "fruits-vegetables", **payload}, format="json")
            self.assertEqual(res.status_code, 400)
            self.assertEqual(res.data["error"], "Please enter a valid price")
        res = self.client.put("/api/admin/edit-product/1/", {"discount": "NaN"}, format="json")
        self.assertEqual(res.status_code, 400)

        res = self.client.post("/api/testimonials/", {
            "customerName": "Asha", "testimonial": "Quick delivery", "rating": "inf",
        }, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["testimonial"]["rating"], 5)

    def test_numeric_category_in_cart_payload(self):
        res = self.client.post("/api/cart/add/", {"id": 1, "category": 7, "quantity": 1}, format="json")
        self.assertEqual(res.status_code, 200)

    def test_corner_products(self):
        res = self.client.post("/api/admin/corners/pan-corner/save-product/",
                               {"name": "Meetha Paan", "price": 30}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["product"]["unit"], "pack")

        res = self.client.get("/api/corners/pan-corner/")
        self.assertEqual([p["name"] for p in res.data["products"]], ["Meetha Paan"])

        res = self.client.get("/api/admin/corners/tea-corner/show-products/")
        self.assertEqual(res.status_code, 404)


class AdminCategoryAPITests(APITestCase):
    def setUp(self):
        super().setUp()
        get_bridge()

    def test_delete_category_removes_its_products(self):
        res = self.client.delete("/api/admin/delete-category/1/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["productsRemoved"], 3)

        res = self.client.get("/api/admin/show-products/")
        self.assertEqual(res.data["count"], 2)

    def test_rename_category(self):
        res = self.client.put("/api/admin/edit-category/2/", {"name": "Dairy Products"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["category"]["slug"], "dairy-products")
        res = self.client.get("/api/categories/dairy-products/products/")
        self.assertEqual(res.data["count"], 2)

    def test_show_categories_with_counts(self):
        res = self.client.get("/api/admin/show-categories/")
        counts = {c["slug"]: c["productCount"] for c in res.data["categories"]}
        self.assertEqual(counts["fruits-vegetables"], 3)
        self.assertEqual(counts["household"], 0)


class AdminOrderUserTestimonialAPITests(APITestCase):
    def setUp(self):
        super().setUp()
        self.bridge = get_bridge()

    def test_order_status_and_stats(self):
        res = self.client.put("/api/admin/edit-order-status/2/", {"status": "Accepted"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["message"], "Order status updated to Accepted")

        res = self.client.get("/api/admin/order-stats/")
        self.assertEqual(res.data["totalOrders"], 2)
        self.assertEqual(res.data["pendingOrders"], 0)

    def test_toggle_user_status(self):
        user = self.bridge.register_user({"name": "Asha", "email": "asha@example.com", "passwordHash": "x"})
        res = self.client.put(f"/api/admin/toggle-user-status/{user['id']}/")
        self.assertEqual(res.data["message"], "User blocked successfully")
        self.assertNotIn("passwordHash", res.data["user"])
        res = self.client.put(f"/api/admin/toggle-user-status/{user['id']}/")
        self.assertEqual(res.data["message"], "User unblocked successfully")

    def test_testimonial_moderation(self):
        res = self.client.post("/api/testimonials/", {
            "customerName": "Asha", "productName": "Fresh Milk", "rating": 5, "testimonial": "Lovely",
        }, format="json")
        self.assertEqual(res.status_code, 201)
        tid = res.data["testimonial"]["id"]
        self.assertEqual(self.client.get("/api/testimonials/").data["testimonials"], [])

        res = self.client.put(f"/api/admin/toggle-testimonial/{tid}/")
        self.assertEqual(res.data["message"], "Testimonial approved successfully")
        self.assertEqual(len(self.client.get("/api/testimonials/").data["testimonials"]), 1)

        res = self.client.put(f"/api/admin/toggle-testimonial/{tid}/")
        self.assertEqual(res.data["message"], "Testimonial rejected successfully")

    def test_create_sample_and_clear_data(self):
        res = self.client.post("/api/admin/create-sample/user/", {"count": 2}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(len(res.data["created"]), 2)
        self.assertEqual(self.client.get("/api/admin/show-users/").data["count"], 2)

        self.assertEqual(self.client.post("/api/admin/clear-data/", {}, format="json").status_code, 400)
        res = self.client.post("/api/admin/clear-data/", {"confirm": True}, format="json")
        self.assertEqual(res.status_code, 200)


class StorefrontAPITests(APITestCase):
    def setUp(self):
        super().setUp()
        get_bridge()

    def test_website_data_polling_token(self):
        first = self.client.get("/api/website-data/")
        self.assertTrue(first.data["changed"])
        token = first.data["token"]

        again = self.client.get("/api/website-data/", {"since": token})
        self.assertEqual(again.data, {"changed": False, "token": token})

        get_bridge().update_product(1, {"price": 130})
        after = self.client.get("/api/website-data/", {"since": token})
        self.assertTrue(after.data["changed"])
        self.assertEqual(after.data["products"]["fruits-vegetables"][0]["price"], 130)

    def test_product_detail(self):
        res = self.client.get("/api/products/1/")
        self.assertEqual(res.data["discountedPrice"], 108)
        self.assertEqual([p["id"] for p in res.data["related"]], [2, 3])
        self.assertEqual(self.client.get("/api/products/999/").status_code, 404)

    def test_product_search_and_sort(self):
        res = self.client.get("/api/products/", {"search": "fresh", "sort": "price-high"})
        self.assertEqual(
            [p["name"] for p in res.data["products"]],
            ["Fresh Apples", "Organic Tomatoes", "Fresh Milk", "White Bread", "Fresh Spinach"],
        )

    def test_category_sort_option_is_validated(self):
        res = self.client.get("/api/categories/dairy-bakery/products/", {"sort": "newest"})
        self.assertEqual(res.status_code, 400)

    @override_settings(ANYNOW_STORE={"CATALOG_SOURCE": "hosted"})
    def test_hosted_catalog_failure_is_bad_gateway(self):
        with mock.patch("anynow_store.catalog.HostedCatalogClient.from_settings") as from_settings:
            from_settings.return_value.list_products.side_effect = HostedBackendError("Hosted backend unavailable")
            from_settings.return_value.list_categories.side_effect = HostedBackendError("Hosted backend unavailable")
            res = self.client.get("/api/products/")
            self.assertEqual(res.status_code, 502)
            self.assertEqual(res.data, {"error": "Hosted backend unavailable"})
            self.assertEqual(self.client.get("/api/categories/").status_code, 502)

    def test_location(self):
        self.assertEqual(self.client.get("/api/location/").data["city"], "Mumbai")
        res = self.client.put("/api/location/", {"city": "Delhi", "area": "110001"}, format="json")
        self.assertEqual(res.data, {"city": "Delhi", "area": "110001"})
        self.assertEqual(self.client.get("/api/location/").data["city"], "Delhi")
        res = self.client.get("/api/location/search/", {"q": "bang"})
        self.assertEqual(res.data["results"], [{"name": "Bangalore", "area": "560001"}])

    def test_location_from_coordinates(self):
        res = self.client.put("/api/location/", {"lat": 12.9, "lon": 77.6}, format="json")
        self.assertEqual(res.data, {"city": "Bangalore", "area": "560001"})


class ShoppingFlowAPITests(APITestCase):
    """
    End-to-end storefront flow.

    GUARANTEES:
    - A signed-up customer can fill a cart, check out and see the order
    - The admin panel sees the order immediately
    """

    def setUp(self):
        super().setUp()
        get_bridge()

    def _signup(self):
        res = self.client.post("/api/account/signup/", {
            "name": "Asha Rao", "email": "asha@example.com", "phone": "9876543210",
            "password": "secret1", "confirmPassword": "secret1",
        }, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["message"], "Signup successful!")
        return res.data["access"]

    def test_cart_math_over_http(self):
        res = self.client.post("/api/cart/add/", {"id": 1, "quantity": 2}, format="json")
        self.assertEqual(res.data["subtotal"], 240)
        res = self.client.post("/api/cart/add/", {"id": 4}, format="json")
        self.assertEqual(res.data["total"], 330)

        res = self.client.put("/api/cart/items/1/", {"quantity": 0}, format="json")
        self.assertEqual([i["id"] for i in res.data["items"]], [4])

        res = self.client.delete("/api/cart/clear/")
        self.assertEqual(res.data["deliveryFee"], 0)

    def test_cart_needs_device_header(self):
        client = APIClient()
        client.credentials(HTTP_X_FRONTEND_KEY=FRONTEND_KEY)
        self.assertEqual(client.get("/api/cart/").status_code, 400)

    def test_signup_checkout_and_order_history(self):
        token = self._signup()
        auth = {"HTTP_AUTHORIZATION": f"Bearer {token}"}

        res = self.client.post("/api/account/addresses/", ADDRESS, format="json", **auth)
        self.assertEqual(res.status_code, 201)

        self.client.post("/api/cart/add/", {"id": 2, "quantity": 3}, format="json")
        res = self.client.post("/api/checkout/", {"paymentMethod": "cod"}, format="json", **auth)
        self.assertEqual(res.status_code, 201)
        order = res.data["order"]
        self.assertEqual(order["totalAmount"], 270)
        self.assertEqual(order["customerName"], "Asha Rao")
        self.assertEqual(order["deliveryAddress"]["city"], "Mumbai")

        self.assertEqual(self.client.get("/api/cart/").data["items"], [])
        mine = self.client.get("/api/account/orders/", **auth)
        self.assertEqual([o["id"] for o in mine.data["orders"]], [order["id"]])

        admin = self.client.get("/api/admin/show-orders/", {"status": "new"})
        self.assertEqual(admin.data["orders"][0]["orderNumber"], order["orderNumber"])

    def test_guest_checkout_with_inline_address(self):
        self.client.post("/api/cart/add/", {"id": 5}, format="json")
        res = self.client.post("/api/checkout/", {"paymentMethod": "card", "address": ADDRESS}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertIsNone(res.data["order"]["customerId"])

    def test_login_me_and_blocking(self):
        self._signup()
        res = self.client.post("/api/account/login/", {"email": "asha@example.com", "password": "secret1"},
                               format="json")
        self.assertEqual(res.data["message"], "Login successful!")
        auth = {"HTTP_AUTHORIZATION": f"Bearer {res.data['access']}"}

        me = self.client.get("/api/account/me/", **auth)
        self.assertEqual(me.data["user"]["email"], "asha@example.com")
        self.assertNotIn("passwordHash", me.data["user"])

        get_bridge().toggle_user_blocked(me.data["user"]["id"])
        self.assertEqual(self.client.get("/api/account/me/", **auth).status_code, 403)

        res = self.client.post("/api/account/login/", {"email": "asha@example.com", "password": "secret1"},
                               format="json")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["error"], "Your account has been blocked")

    def test_me_requires_token(self):
        self.assertEqual(self.client.get("/api/account/me/").status_code, 401)
        res = self.client.get("/api/account/me/", HTTP_AUTHORIZATION="Bearer junk")
        self.assertEqual(res.status_code, 401)

    def test_logout_message(self):
        res = self.client.post("/api/account/logout/")
        self.assertEqual(res.data["message"], "Logged out successfully!")

    def test_checkout_state_lives_in_shared_store(self):
        self.client.post("/api/cart/add/", {"id": 1}, format="json")
        self.client.post("/api/checkout/", {"paymentMethod": "upi", "address": ADDRESS}, format="json")
        self.assertEqual(len(local_store.get("orders")), 3)
