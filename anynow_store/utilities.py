# Standard Library
import json
import re
from decimal import Decimal, InvalidOperation

# Django
from django.utils import timezone

# Django REST Framework
from rest_framework import status
from rest_framework.response import Response

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def generate_slug(name):
    slug = _SLUG_STRIP.sub("-", (name or "").lower())
    return slug.strip("-")

def _parse_payload(request):
    """Consistent, tolerant request payload parsing."""
    if isinstance(request.data, dict):
        return request.data
    try:
        body = request.body.decode("utf-8") if request.body else "{}"
        return json.loads(body or "{}")
    except (UnicodeDecodeError, ValueError):
        return {}

def _now():
    return timezone.now()

def _stamp():
    return timezone.now().isoformat()

def _to_decimal(val, default="0"):
    try:
        d = Decimal(str(val))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal(default)
    if not d.is_finite():
        return Decimal(default)
    return d

def _to_number(val):
    """Decimal -> int when whole, else float, for JSON storage."""
    d = val if isinstance(val, Decimal) else _to_decimal(val)
    if d == d.to_integral_value():
        return int(d)
    return float(d)

def _as_int(val, default=None):
    try:
        return int(str(val).strip())
    except (TypeError, ValueError):
        return default

def _as_bool(val, default=False):
    if isinstance(val, bool):
        return val
    if val is None or val == "":
        return default
    s = str(val).strip().lower()
    if s in ("true", "1", "yes", "on"):
        return True
    if s in ("false", "0", "no", "off"):
        return False
    return default

def _clamp_rating(n):
    try:
        n = int(round(float(n)))
    except (TypeError, ValueError, OverflowError):
        return 5
    return max(1, min(5, n))

def _next_id(records):
    ids = [r.get("id") for r in records if isinstance(r.get("id"), int)]
    return max(ids, default=0) + 1

def _matches(record, query, fields):
    q = str(query or "").strip().lower()
    if not q:
        return True
    return any(q in str(record.get(f) or "").lower() for f in fields)

# --------------------------
# View helpers
# --------------------------

def _error(message, code=status.HTTP_400_BAD_REQUEST):
    return Response({"error": message}, status=code)


def _device_id(request):
    return (request.headers.get("X-Device-UUID") or "").strip()
