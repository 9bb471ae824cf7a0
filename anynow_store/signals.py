import logging

from django.db.models.signals import post_save, post_delete
from django.dispatch import Signal, receiver

from .conf import KEY_PREFIX
from .models import StoredValue

logger = logging.getLogger(__name__)

# Sent with `key` (unprefixed) and `removed` whenever a stored key changes.
storage_changed = Signal()


def _unprefixed(full_key):
    return full_key[len(KEY_PREFIX):] if full_key.startswith(KEY_PREFIX) else full_key


# ==== SIGNALS ====
@receiver(post_save, sender=StoredValue)
def announce_value_saved(sender, instance, **kwargs):
    storage_changed.send(sender=StoredValue, key=_unprefixed(instance.key), removed=False)

@receiver(post_delete, sender=StoredValue)
def announce_value_removed(sender, instance, **kwargs):
    storage_changed.send(sender=StoredValue, key=_unprefixed(instance.key), removed=True)


@receiver(storage_changed)
def reload_bridge_collection(sender, key, **kwargs):
    """Keep an already-built data bridge in step with the store."""
    from .bridge import peek_bridge

    bridge = peek_bridge()
    if bridge is None:
        return
    if bridge.refresh(key):
        logger.debug("Bridge reloaded %s after storage change", key)
