# anynow_store/forms.py
"""
Validation of the admin panel's product, category and testimonial forms.

Each ``clean_*`` function returns a normalized dict ready for the data
bridge or raises ``FormError`` with the message the panel shows the user.
"""
import base64
import binascii
import logging
from io import BytesIO

from PIL import Image as PILImage, UnidentifiedImageError

from .errors import FormError
from .utilities import _as_bool, _as_int, _clamp_rating, _to_decimal, _to_number, generate_slug

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
MAX_IMAGE_BYTES = 5 * 1024 * 1024

INVALID_IMAGE_TYPE = "Please upload a valid image file (JPG, PNG, or WEBP)"
IMAGE_TOO_LARGE = "Image size should be less than 5MB"


def _is_http_url(s):
    return s.startswith("http://") or s.startswith("https://")


def validate_image(value):
    """
    Accept an http(s) URL as-is, or a base64 data URL of an allowed type
    no larger than 5MB that Pillow can decode. Returns the value unchanged.
    """
    if not value:
        return ""
    if not isinstance(value, str):
        raise FormError(INVALID_IMAGE_TYPE)
    value = value.strip()
    if _is_http_url(value):
        return value
    if not value.startswith("data:") or "," not in value:
        raise FormError(INVALID_IMAGE_TYPE)

    header, encoded = value.split(",", 1)
    mime = header[5:].split(";")[0].strip().lower()
    if mime not in ALLOWED_IMAGE_TYPES:
        raise FormError(INVALID_IMAGE_TYPE)

    try:
        blob = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise FormError(INVALID_IMAGE_TYPE)
    if len(blob) > MAX_IMAGE_BYTES:
        raise FormError(IMAGE_TOO_LARGE)

    try:
        img = PILImage.open(BytesIO(blob))
        img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        logger.warning("Rejected undecodable %s upload (%d bytes)", mime, len(blob))
        raise FormError(INVALID_IMAGE_TYPE)
    return value


def clean_product_form(data, partial=False, default_unit="kg"):
    """
    Normalize a product form. With `partial`, only the fields present are
    validated and returned (used for edits).
    """
    out = {}

    if not partial or "name" in data:
        name = str(data.get("name") or "").strip()
        if not name:
            raise FormError("Product name is required")
        out["name"] = name

    if "category" in data or not partial:
        category = str(data.get("category") or "").strip()
        if category:
            out["category"] = category

    if not partial or "price" in data:
        price = _to_decimal(data.get("price"), default="-1")
        if price < 0:
            raise FormError("Please enter a valid price")
        out["price"] = _to_number(price)

    if not partial or "quantity" in data:
        quantity = _as_int(data.get("quantity") if data.get("quantity") not in (None, "") else 0)
        if quantity is None or quantity < 0:
            raise FormError("Please enter a valid quantity")
        out["quantity"] = quantity

    if not partial or "discount" in data:
        raw = data.get("discount")
        discount = _to_decimal(raw if raw not in (None, "") else 0, default="-1")
        if discount < 0 or discount > 100:
            raise FormError("Discount must be between 0 and 100")
        out["discount"] = _to_number(discount)

    if not partial or "unit" in data:
        out["unit"] = str(data.get("unit") or default_unit).strip()

    if not partial or "description" in data:
        out["description"] = str(data.get("description") or "")

    if not partial or "image" in data:
        out["image"] = validate_image(data.get("image"))

    if "featured" in data:
        out["featured"] = _as_bool(data.get("featured"))
    elif not partial:
        out["featured"] = False

    return out


def clean_category_form(data, partial=False):
    out = {}
    if not partial or "name" in data:
        name = str(data.get("name") or "").strip()
        if not name:
            raise FormError("Category name is required")
        out["name"] = name
    slug = str(data.get("slug") or "").strip()
    if slug:
        out["slug"] = generate_slug(slug)
    elif "name" in out:
        out["slug"] = generate_slug(out["name"])
    if "slug" in out and not out["slug"]:
        raise FormError("Category name must contain letters or numbers")
    return out


def clean_testimonial_form(data):
    customer = str(data.get("customerName") or "").strip()
    text = str(data.get("testimonial") or "").strip()
    if not customer or not text:
        raise FormError("Please fill in all fields")
    return {
        "customerName": customer,
        "customerEmail": str(data.get("customerEmail") or "").strip(),
        "customerPhone": str(data.get("customerPhone") or "").strip(),
        "productName": str(data.get("productName") or "").strip(),
        "rating": _clamp_rating(data.get("rating", 5)),
        "testimonial": text,
        "orderDate": data.get("orderDate") or None,
    }
