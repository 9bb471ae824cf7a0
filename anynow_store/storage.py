# anynow_store/storage.py
"""
Key-value storage shim shared by the storefront and the admin panel.

Every value is a JSON document stored under an ``anynow_``-prefixed key.
Reads never raise: a missing key or an undecodable blob reads as ``None``.
Writes report success as a bool. Change notification happens through the
``storage_changed`` signal (see ``signals.py``).
"""
import json
import logging

from django.db import DatabaseError

from .conf import KEY_PREFIX
from .models import StoredValue

logger = logging.getLogger(__name__)


class LocalStore:
    def __init__(self, prefix=KEY_PREFIX):
        self.prefix = prefix

    def full_key(self, key):
        return f"{self.prefix}{key}"

    def strip_prefix(self, full_key):
        if full_key.startswith(self.prefix):
            return full_key[len(self.prefix):]
        return full_key

    def raw(self, key):
        """Stored JSON text for `key`, or None."""
        row = StoredValue.objects.filter(key=self.full_key(key)).only("value").first()
        return row.value if row else None

    def get(self, key, default=None):
        data = self.raw(key)
        if not data:
            return default
        try:
            return json.loads(data)
        except (TypeError, ValueError):
            logger.error("Error loading %s from storage: undecodable JSON", key)
            return default

    def set(self, key, data):
        try:
            encoded = json.dumps(data)
        except (TypeError, ValueError):
            logger.exception("Error saving %s to storage", key)
            return False
        try:
            StoredValue.objects.update_or_create(
                key=self.full_key(key), defaults={"value": encoded}
            )
        except DatabaseError:
            logger.exception("Error saving %s to storage", key)
            return False
        return True

    def remove(self, key):
        deleted, _ = StoredValue.objects.filter(key=self.full_key(key)).delete()
        return deleted > 0

    def exists(self, key):
        return StoredValue.objects.filter(key=self.full_key(key)).exists()

    def keys(self):
        full = StoredValue.objects.filter(key__startswith=self.prefix).values_list("key", flat=True)
        return [self.strip_prefix(k) for k in full]

    def clear(self):
        StoredValue.objects.filter(key__startswith=self.prefix).delete()


local_store = LocalStore()
