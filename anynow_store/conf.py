# anynow_store/conf.py
from decimal import Decimal

from django.conf import settings

DEFAULTS = {
    "POLL_INTERVAL": 2.0,
    "DELIVERY_FEE": "30",
    "CATALOG_SOURCE": "local",
    "HOSTED_URL": "",
    "HOSTED_KEY": "",
    "HOSTED_TIMEOUT": 10.0,
}

KEY_PREFIX = "anynow_"


def store_setting(name):
    overrides = getattr(settings, "ANYNOW_STORE", {}) or {}
    return overrides.get(name, DEFAULTS[name])


def poll_interval():
    return float(store_setting("POLL_INTERVAL"))


def delivery_fee():
    return Decimal(str(store_setting("DELIVERY_FEE")))


def catalog_source():
    return (store_setting("CATALOG_SOURCE") or "local").strip().lower()
