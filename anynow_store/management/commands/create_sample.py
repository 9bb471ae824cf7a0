# anynow_store/management/commands/create_sample.py

from django.core.management.base import BaseCommand, CommandError

from anynow_store.bridge import DataBridge, get_bridge


class Command(BaseCommand):
    help = "Add sample orders, users or testimonials for trying out the admin panel."

    def add_arguments(self, parser):
        parser.add_argument("kind", choices=sorted(DataBridge.SAMPLE_FACTORIES))
        parser.add_argument("--count", type=int, default=1)

    def handle(self, *args, **options):
        count = options["count"]
        if count < 1:
            raise CommandError("--count must be at least 1")

        bridge = get_bridge()
        for _ in range(count):
            record = bridge.add_sample(options["kind"])
            label = record.get("customerName") or record.get("name")
            self.stdout.write(f"  + {options['kind']} #{record['id']} ({label})")

        self.stdout.write(self.style.SUCCESS(f"Created {count} sample {options['kind']} record(s)."))
