# anynow_store/checkout.py
import logging

from django.utils import timezone

from .bridge import get_bridge
from .errors import FormError
from .utilities import _stamp

logger = logging.getLogger(__name__)

PAYMENT_METHODS = ("upi", "card", "cod")

ADDRESS_FIELDS = ("name", "street", "area", "city", "pincode", "phone")


def format_address(address):
    parts = [address.get(k) for k in ("street", "area", "city")]
    line = ", ".join(str(p) for p in parts if p)
    if address.get("pincode"):
        line = f"{line} - {address['pincode']}" if line else str(address["pincode"])
    return line


def order_number(order_id, when=None):
    when = when or timezone.now()
    return f"ORD-{when.year}-{order_id:04d}"


def place_order(cart, customer, address, payment_method):
    """
    Turn the cart into an order with status "New" and empty the cart.

    `customer` is the signed-in user record (or None for a guest);
    `address` is a delivery address dict.
    """
    lines = cart.lines()
    if not lines:
        raise FormError("No items in cart")

    payment_method = str(payment_method or "").strip().lower()
    if payment_method not in PAYMENT_METHODS:
        raise FormError("Please select a payment method")

    address = address or {}
    if not all(str(address.get(k) or "").strip() for k in ("street", "city", "pincode")):
        raise FormError("Please select a delivery address")

    customer = customer or {}
    totals = cart.totals()
    now = _stamp()
    record = {
        "customerId": customer.get("id"),
        "customerName": customer.get("name") or address.get("name") or "Guest",
        "customerEmail": customer.get("email") or "",
        "customerPhone": address.get("phone") or customer.get("phone") or "",
        "deliveryLocation": format_address(address),
        "deliveryAddress": {k: address.get(k) for k in ADDRESS_FIELDS if k in address},
        "paymentMethod": payment_method,
        "items": [
            {
                "id": line.get("id"),
                "name": line.get("name"),
                "price": line.get("price"),
                "quantity": line.get("quantity"),
                "image": line.get("image"),
            }
            for line in lines
        ],
        "subtotal": totals["subtotal"],
        "deliveryFee": totals["deliveryFee"],
        "totalAmount": totals["total"],
        "status": "New",
        "orderDate": now,
        "updatedAt": now,
    }

    order = get_bridge().add_order(record, numbering=order_number)
    cart.clear()
    logger.info("Order %s placed for %s (%s)", order["orderNumber"], order["customerName"], payment_method)
    return order
