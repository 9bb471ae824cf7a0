# Standard Library
import logging

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

# Local Imports
from .accounts import AccountBlocked, AddressBook, AuthenticationFailed, current_user
from .bridge import get_bridge
from .cart import Cart
from .catalog import find_product, get_category_products
from .checkout import place_order
from .errors import FormError, NotFoundError
from .permissions import FrontendOnlyPermission
from .utilities import _as_int, _device_id, _error, _parse_payload

logger = logging.getLogger(__name__)


# --------------------------
# Admin: orders
# --------------------------

class ShowOrdersAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh("orders")
        orders = bridge.get_all_orders()
        status_filter = (request.query_params.get("status") or "").strip().lower()
        if status_filter and status_filter != "all":
            orders = [o for o in orders if str(o.get("status") or "").lower() == status_filter]
        return Response({"orders": orders, "count": len(orders)}, status=status.HTTP_200_OK)


class ShowSpecificOrderAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request, order_id):
        order = get_bridge().get_order(order_id)
        if order is None:
            return _error("Order not found", status.HTTP_404_NOT_FOUND)
        return Response(order, status=status.HTTP_200_OK)


class EditOrderStatusAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, order_id):
        data = _parse_payload(request)
        try:
            order = get_bridge().update_order_status(order_id, data.get("status"))
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except FormError as e:
            return _error(str(e))
        return Response(
            {"success": True, "message": f"Order status updated to {order['status']}", "order": order},
            status=status.HTTP_200_OK,
        )

    patch = put


class OrderStatsAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        bridge = get_bridge()
        bridge.refresh("orders")
        return Response(bridge.get_order_stats(), status=status.HTTP_200_OK)


# --------------------------
# Storefront: cart
# --------------------------

def _cart_for(request):
    return Cart(_device_id(request))


def _lookup_product(data):
    """Resolve a product by id, looking in a corner catalog when `category` names one."""
    category = str(data.get("category") or "").strip()
    if category in ("pan-corner", "liquor-corner"):
        pid = _as_int(data.get("id") or data.get("product_id"))
        for p in get_category_products(category):
            if p.get("id") == pid:
                return p
        return None
    return find_product(data.get("id") or data.get("product_id"))


class ShowCartAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def get(self, request):
        try:
            cart = _cart_for(request)
        except FormError as e:
            return _error(str(e))
        return Response(cart.as_dict(), status=status.HTTP_200_OK)


class SaveCartAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        try:
            cart = _cart_for(request)
        except FormError as e:
            return _error(str(e))

        product = _lookup_product(data)
        if product is None:
            return _error("Product not found", status.HTTP_404_NOT_FOUND)
        if product.get("inStock") is False:
            return _error("Product is out of stock")

        cart.add(product, data.get("quantity", 1))
        return Response(
            {"success": True, "message": f"{product.get('name')} added to cart", **cart.as_dict()},
            status=status.HTTP_200_OK,
        )


class EditCartAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def put(self, request, product_id):
        data = _parse_payload(request)
        try:
            cart = _cart_for(request)
            cart.update_quantity(product_id, data.get("quantity"))
        except NotFoundError as e:
            return _error(str(e), status.HTTP_404_NOT_FOUND)
        except FormError as e:
            return _error(str(e))
        return Response(cart.as_dict(), status=status.HTTP_200_OK)

    patch = put


class DeleteCartItemAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def delete(self, request, product_id):
        try:
            cart = _cart_for(request)
        except FormError as e:
            return _error(str(e))
        cart.remove(product_id)
        return Response(cart.as_dict(), status=status.HTTP_200_OK)


class ClearCartAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def delete(self, request):
        try:
            cart = _cart_for(request)
        except FormError as e:
            return _error(str(e))
        cart.clear()
        return Response(cart.as_dict(), status=status.HTTP_200_OK)


# --------------------------
# Storefront: checkout
# --------------------------

class CheckoutAPIView(APIView):
    permission_classes = [FrontendOnlyPermission]

    def post(self, request):
        data = _parse_payload(request)
        try:
            customer = current_user(request, required=False)
        except AuthenticationFailed as e:
            return _error(str(e), status.HTTP_401_UNAUTHORIZED)
        except AccountBlocked as e:
            return _error(str(e), status.HTTP_403_FORBIDDEN)

        address = data.get("address")
        if customer and not isinstance(address, dict):
            book = AddressBook(customer["id"])
            address_id = _as_int(data.get("address_id") or data.get("addressId"))
            address = book.get(address_id) if address_id is not None else book.default()

        try:
            cart = _cart_for(request)
            order = place_order(cart, customer, address, data.get("paymentMethod"))
        except FormError as e:
            return _error(str(e))
        except Exception:
            logger.exception("Checkout failed")
            return _error("Could not place order", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(
            {"success": True, "message": "Order placed successfully!", "order": order},
            status=status.HTTP_201_CREATED,
        )
