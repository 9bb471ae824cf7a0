# anynow_store/management/commands/watch_store.py

import logging
import time

from django.core.management.base import BaseCommand

from anynow_store.conf import poll_interval
from anynow_store.sync import subscribe_to_admin_data, watch_keys

logger = logging.getLogger("anynow_store.watch")


class Command(BaseCommand):
    help = "Poll the shared catalog and log every change, like the storefront does."

    def add_arguments(self, parser):
        parser.add_argument("--interval", type=float, default=None,
                            help="Seconds between polls (default: ANYNOW_POLL_INTERVAL).")

    def handle(self, *args, **options):
        interval = options["interval"] or poll_interval()

        def on_change(data):
            counts = {slug: len(items) for slug, items in data["products"].items()}
            logger.info("Catalog changed: %d categories, products per category %s",
                        len(data["categories"]), counts)
            self.stdout.write(f"catalog changed: {counts}")

        def on_key(key, removed):
            logger.info("Storage key %s %s", key, "removed" if removed else "written")

        stop_keys = watch_keys(["products", "categories", "orders"], on_key)
        unsubscribe = subscribe_to_admin_data(on_change, interval=interval)
        self.stdout.write(self.style.SUCCESS(f"Watching store every {interval:g}s; Ctrl+C to stop."))
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            self.stdout.write("Stopped.")
        finally:
            unsubscribe()
            stop_keys()
