from django.core.management.base import BaseCommand

from core.services.seed import SAMPLE_STAFF, seed_staff


class Command(BaseCommand):
    help = "Create the sample staff members unless staff already exist (idempotent)."

    def handle(self, *args, **opts):
        self.stdout.write("Seeding staff data...")
        created = seed_staff()
        if not created:
            self.stdout.write(self.style.WARNING("Staff already seeded"))
            return
        for first, last, email, role, dept in SAMPLE_STAFF:
            self.stdout.write(f"ok: {first} {last} <{email}> {role}, {dept}")
        self.stdout.write(self.style.SUCCESS(f"Created {created} staff members."))
