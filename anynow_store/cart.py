# anynow_store/cart.py
import logging
import re

from .conf import delivery_fee
from .errors import FormError, NotFoundError
from .storage import local_store
from .utilities import _as_int, _to_decimal, _to_number

logger = logging.getLogger(__name__)

_DEVICE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

CART_FIELDS = ("id", "name", "price", "unit", "image", "category", "discount")


def cart_totals(lines, fee=None):
    """Subtotal of price x quantity plus a flat delivery fee on non-empty carts."""
    fee = delivery_fee() if fee is None else _to_decimal(fee)
    subtotal = sum(
        (_to_decimal(line.get("price")) * (_as_int(line.get("quantity"), 0) or 0) for line in lines),
        _to_decimal(0),
    )
    charge = fee if lines else _to_decimal(0)
    return {
        "subtotal": _to_number(subtotal),
        "deliveryFee": _to_number(charge),
        "total": _to_number(subtotal + charge),
        "itemCount": sum(_as_int(line.get("quantity"), 0) or 0 for line in lines),
    }


class Cart:
    def __init__(self, device_id, store=None):
        device_id = (device_id or "").strip()
        if not _DEVICE_ID.match(device_id):
            raise FormError("A valid X-Device-UUID header is required")
        self.device_id = device_id
        self.store = store or local_store

    @property
    def key(self):
        return f"cart_{self.device_id}"

    def lines(self):
        items = self.store.get(self.key)
        return items if isinstance(items, list) else []

    def _save(self, lines):
        self.store.set(self.key, lines)
        return lines

    def add(self, product, quantity=1):
        quantity = max(1, _as_int(quantity, 1) or 1)
        lines = self.lines()
        for line in lines:
            if line.get("id") == product.get("id"):
                line["quantity"] = (_as_int(line.get("quantity"), 0) or 0) + quantity
                return self._save(lines)
        line = {k: product.get(k) for k in CART_FIELDS if k in product}
        line["quantity"] = quantity
        lines.append(line)
        return self._save(lines)

    def update_quantity(self, product_id, quantity):
        pid = _as_int(product_id)
        quantity = _as_int(quantity, 0) or 0
        lines = self.lines()
        if not any(line.get("id") == pid for line in lines):
            raise NotFoundError("Item not in cart")
        if quantity < 1:
            return self._save([line for line in lines if line.get("id") != pid])
        for line in lines:
            if line.get("id") == pid:
                line["quantity"] = quantity
        return self._save(lines)

    def remove(self, product_id):
        pid = _as_int(product_id)
        return self._save([line for line in self.lines() if line.get("id") != pid])

    def clear(self):
        self.store.remove(self.key)
        logger.debug("Cart %s cleared", self.device_id)

    def totals(self):
        return cart_totals(self.lines())

    def as_dict(self):
        lines = self.lines()
        return {"items": lines, **cart_totals(lines)}
