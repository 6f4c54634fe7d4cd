from __future__ import annotations

from django.utils import timezone

from core.models import Staff

SAMPLE_STAFF = (
    ('John', 'Doe', 'john.doe@example.com', 'Doctor', 'Emergency'),
    ('Jane', 'Smith', 'jane.smith@example.com', 'Surgeon', 'Surgery'),
    ('Michael', 'Johnson', 'michael.johnson@example.com', 'Pediatrician', 'Pediatrics'),
    ('Sarah', 'Williams', 'sarah.williams@example.com', 'Nurse', 'Emergency'),
    ('David', 'Brown', 'david.brown@example.com', 'Anesthesiologist', 'Surgery'),
    ('Emily', 'Davis', 'emily.davis@example.com', 'Nurse', 'Pediatrics'),
)


def seed_staff() -> int:
    """Create the sample staff unless any staff row exists. Returns the number created."""
    if Staff.objects.exists():
        return 0
    today = timezone.localdate()
    Staff.objects.bulk_create([
        Staff(first_name=first, last_name=last, email=email, role=role,
              department=dept, status='Active', join_date=today)
        for first, last, email, role, dept in SAMPLE_STAFF
    ])
    return len(SAMPLE_STAFF)
