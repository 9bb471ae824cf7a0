# anynow_store/management/commands/seed_store.py

from django.core.management.base import BaseCommand

from anynow_store.bridge import get_bridge, reset_bridge
from anynow_store.storage import local_store


class Command(BaseCommand):
    help = "Seed the shared store with default products, categories and orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Drop products, categories and orders and restore the defaults.",
        )

    def handle(self, *args, **options):
        reset_bridge()
        fresh = not local_store.exists("products")
        bridge = get_bridge()

        if options["reset"]:
            bridge.clear_all_data()
            self.stdout.write(self.style.WARNING("Products, categories and orders reset to defaults."))
        elif fresh:
            self.stdout.write(self.style.SUCCESS("Empty store seeded with defaults."))
        else:
            self.stdout.write("Store already initialized; nothing to do (use --reset to restore defaults).")

        self.stdout.write(
            f"products={len(bridge.get_all_products())} "
            f"categories={len(bridge.get_all_categories())} "
            f"orders={len(bridge.get_all_orders())}"
        )
