# anynow_store/sync.py
"""
Change notification for the shared store.

Two mechanisms, as the storefront and admin panel use them:

* snapshot polling: re-read the data every few seconds and call back when
  its serialized form differs from the last one seen;
* storage events: ``storage_changed`` fires synchronously on every write
  made in this process, and ``watch_keys`` filters it to a key set.
"""
import hashlib
import json
import logging
import threading

from .conf import poll_interval
from .signals import storage_changed

logger = logging.getLogger(__name__)


def _serialize(data):
    return json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)


def snapshot_token(data):
    """Stable digest of a snapshot, handed to HTTP clients for `?since=` polling."""
    return hashlib.sha1(_serialize(data).encode("utf-8")).hexdigest()


class SnapshotPoller:
    """Call `callback(data)` whenever `fetch()` returns something new."""

    def __init__(self, fetch, callback, interval=None, name="snapshot-poller", initial=None):
        self.fetch = fetch
        self.callback = callback
        self.interval = poll_interval() if interval is None else float(interval)
        self.name = name
        self._last = None if initial is None else _serialize(initial)
        self._stop = threading.Event()
        self._thread = None

    def check(self):
        data = self.fetch()
        current = _serialize(data)
        if current == self._last:
            return False
        self._last = current
        self.callback(data)
        return True

    def _run(self):
        while not self._stop.wait(self.interval):
            try:
                self.check()
            except Exception:
                # keep polling
                logger.exception("%s: update check failed", self.name)

    def start(self):
        self.check()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        return self

    def stop(self):
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.interval + 1)
        self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()


def subscribe_to_admin_data(callback, interval=None):
    """Poll the grouped catalog; returns an unsubscribe callable."""
    from .catalog import fetch_admin_data

    poller = SnapshotPoller(fetch_admin_data, callback, interval, name="admin-data-poller").start()
    return poller.stop


def subscribe_to_featured_products(callback, interval=None):
    from .catalog import fetch_featured_products

    # nothing featured yet is not a change
    poller = SnapshotPoller(
        fetch_featured_products, callback, interval, name="featured-poller", initial=[]
    ).start()
    return poller.stop


def watch_keys(keys, handler):
    """
    Call `handler(key, removed)` for writes to any of `keys` (unprefixed).
    Returns an unsubscribe callable.
    """
    watched = frozenset(keys)

    def _listener(sender, key, removed=False, **kwargs):
        if key in watched:
            handler(key, removed)

    storage_changed.connect(_listener, weak=False)

    def unsubscribe():
        storage_changed.disconnect(_listener)

    return unsubscribe
