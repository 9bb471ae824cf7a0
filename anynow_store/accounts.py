# anynow_store/accounts.py
"""
Customer accounts: signup and login against the shared users collection,
bearer tokens, the address book, and the per-device delivery location.
"""
import logging
import math
import re

from django.contrib.auth.hashers import check_password, make_password
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from . import defaults
from .bridge import get_bridge
from .errors import FormError, NotFoundError
from .storage import local_store
from .utilities import _as_bool, _as_int, _stamp

logger = logging.getLogger(__name__)

FILL_ALL_FIELDS = "Please fill in all fields"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"
PASSWORD_TOO_SHORT = "Password must be at least 6 characters"
EMAIL_TAKEN = "User with this email already exists"
INVALID_CREDENTIALS = "Invalid email or password"
ACCOUNT_BLOCKED = "Your account has been blocked"

SIGNUP_OK = "Signup successful!"
LOGIN_OK = "Login successful!"
LOGOUT_OK = "Logged out successfully!"

MIN_PASSWORD_LENGTH = 6

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AuthenticationFailed(Exception):
    pass


class AccountBlocked(Exception):
    pass


def public_user(user):
    """User record without credentials."""
    return {k: v for k, v in (user or {}).items() if k != "passwordHash"}


def issue_token(user):
    token = AccessToken()
    token["customer_id"] = user["id"]
    token["email"] = user.get("email", "")
    return str(token)


def user_from_token(raw):
    try:
        token = AccessToken(raw)
    except TokenError as e:
        raise AuthenticationFailed("Session expired, please log in again") from e
    user = get_bridge().get_user(token.get("customer_id"))
    if user is None:
        raise AuthenticationFailed("Session expired, please log in again")
    if user.get("isBlocked"):
        raise AccountBlocked(ACCOUNT_BLOCKED)
    return user


def bearer_token(request):
    header = request.headers.get("Authorization") or ""
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def current_user(request, required=True):
    raw = bearer_token(request)
    if raw is None:
        if required:
            raise AuthenticationFailed("Please log in to continue")
        return None
    return user_from_token(raw)


# --------------------------
# Signup / login
# --------------------------

def signup(data):
    name = str(data.get("name") or "").strip()
    email = str(data.get("email") or "").strip().lower()
    phone = str(data.get("phone") or "").strip()
    password = str(data.get("password") or "")
    confirm = str(data.get("confirmPassword") or "")

    if not name or not email or not password or not confirm:
        raise FormError(FILL_ALL_FIELDS)
    if password != confirm:
        raise FormError(PASSWORDS_DO_NOT_MATCH)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise FormError(PASSWORD_TOO_SHORT)
    if not _EMAIL.match(email):
        raise FormError("Please enter a valid email address")

    bridge = get_bridge()
    if bridge.find_user_by_email(email):
        raise FormError(EMAIL_TAKEN)

    now = _stamp()
    user = bridge.register_user({
        "name": name,
        "email": email,
        "phone": phone,
        "passwordHash": make_password(password),
        "signupDate": now,
        "lastLogin": now,
    })
    logger.info("Customer %s signed up", user["id"])
    return user, issue_token(user)


def login(data):
    email = str(data.get("email") or "").strip().lower()
    password = str(data.get("password") or "")
    if not email or not password:
        raise FormError(FILL_ALL_FIELDS)

    bridge = get_bridge()
    user = bridge.find_user_by_email(email)
    if user is None or not check_password(password, user.get("passwordHash") or ""):
        logger.info("Failed login for %s", email)
        raise FormError(INVALID_CREDENTIALS)
    if user.get("isBlocked"):
        raise AccountBlocked(ACCOUNT_BLOCKED)

    user = bridge.record_login(user["id"])
    return user, issue_token(user)


# --------------------------
# Address book
# --------------------------

ADDRESS_FIELDS = ("name", "street", "area", "city", "pincode", "phone")


class AddressBook:
    KEY = "addresses"

    def __init__(self, customer_id, store=None):
        self.owner = str(customer_id)
        self.store = store or local_store

    def _all(self):
        data = self.store.get(self.KEY)
        return data if isinstance(data, dict) else {}

    def list(self):
        return self._all().get(self.owner, [])

    def _save(self, addresses):
        data = self._all()
        data[self.owner] = addresses
        self.store.set(self.KEY, data)
        return addresses

    def get(self, address_id):
        for a in self.list():
            if a.get("id") == address_id:
                return a
        return None

    def default(self):
        addresses = self.list()
        for a in addresses:
            if a.get("isDefault"):
                return a
        return addresses[0] if addresses else None

    def add(self, data):
        address = {k: str(data.get(k) or "").strip() for k in ADDRESS_FIELDS}
        if not address["street"] or not address["city"] or not address["pincode"]:
            raise FormError(FILL_ALL_FIELDS)
        if not re.fullmatch(r"\d{6}", address["pincode"]):
            raise FormError("Please enter a valid 6-digit PIN code")
        address["name"] = address["name"] or "Home"

        addresses = self.list()
        ids = [_as_int(a.get("id"), 0) or 0 for a in addresses]
        address["id"] = max(ids, default=0) + 1
        address["isDefault"] = not addresses or _as_bool(data.get("isDefault"), default=False)
        if address["isDefault"]:
            for a in addresses:
                a["isDefault"] = False
        addresses.append(address)
        self._save(addresses)
        return address

    def remove(self, address_id):
        addresses = self.list()
        kept = [a for a in addresses if a.get("id") != address_id]
        if len(kept) == len(addresses):
            raise NotFoundError("Address not found")
        if kept and not any(a.get("isDefault") for a in kept):
            kept[0]["isDefault"] = True
        self._save(kept)
        return kept

    def set_default(self, address_id):
        addresses = self.list()
        if not any(a.get("id") == address_id for a in addresses):
            raise NotFoundError("Address not found")
        for a in addresses:
            a["isDefault"] = a.get("id") == address_id
        self._save(addresses)
        return addresses


# --------------------------
# Delivery location
# --------------------------

def _location_key(device_id):
    return f"location_{device_id}"


def get_location(device_id, store=None):
    store = store or local_store
    location = store.get(_location_key(device_id)) if device_id else None
    if isinstance(location, dict) and location.get("city"):
        return location
    return dict(defaults.DEFAULT_LOCATION)


def set_location(device_id, city, area, store=None):
    city = str(city or "").strip()
    area = str(area or "").strip()
    if not city:
        raise FormError("Please select a city")
    if not device_id:
        raise FormError("A valid X-Device-UUID header is required")
    location = {"city": city, "area": area}
    (store or local_store).set(_location_key(device_id), location)
    return location


def search_locations(query):
    q = str(query or "").strip().lower()
    if not q:
        return []
    return [dict(c) for c in defaults.DELIVERY_CITIES if q in c["name"].lower()]


def nearest_city(lat, lon):
    """Closest known city by straight-line distance on raw coordinates."""
    closest = min(
        defaults.CITY_COORDINATES,
        key=lambda c: math.hypot(lat - c["lat"], lon - c["lon"]),
    )
    return closest["name"]
