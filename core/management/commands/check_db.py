from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connections


class Command(BaseCommand):
    help = "Connect to the configured database and print its current time."

    def add_arguments(self, parser):
        parser.add_argument("--database", default="default")

    def handle(self, *args, **opts):
        alias = opts["database"]
        conn = connections[alias]
        self.stdout.write(f"Testing connection to {conn.vendor} database '{alias}'...")
        try:
            with conn.cursor() as c:
                c.execute("SELECT CURRENT_TIMESTAMP")
                row = c.fetchone()
        except DatabaseError as e:
            raise CommandError(f"Database connection failed: {e}") from e
        self.stdout.write(self.style.SUCCESS("Database connection successful"))
        self.stdout.write(f"Current database time: {row[0]}")
