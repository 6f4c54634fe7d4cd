"""
Management command to populate the database with demo data.
"""
import random
from datetime import datetime, time, timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from core.models import (
    Admission, Appointment, Attendance, Bill, InsuranceClaim, Patient, Payment, Shift, Staff,
)
from core.services.seed import seed_staff


class Command(BaseCommand):
    help = 'Populate database with demo data'

    def add_arguments(self, parser):
        parser.add_argument('--days', type=int, default=30, help='Days of attendance/payment history')
        parser.add_argument('--seed', type=int, default=None, help='Random seed for repeatable data')

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        days = max(options['days'], 1)
        self.stdout.write('Creating demo data...')

        seed_staff()
        staff = list(Staff.objects.all())

        patients = self.create_patients()
        self.create_appointments(patients, rng)
        self.create_admissions(patients)
        bills = self.create_bills(patients, rng)
        self.create_payments(bills, rng, days)
        self.create_claims(patients, rng)
        self.create_attendance(staff, rng, days)
        self.create_shifts(staff)

        self.stdout.write(self.style.SUCCESS('Demo data created.'))

    def aware(self, day, hour, minute=0):
        return timezone.make_aware(datetime.combine(day, time(hour, minute)))

    def create_patients(self):
        patients_data = [
            ('Alice', 'Walker', '1985-04-12', 'Female', '555-0101'),
            ('Brian', 'Lee', '1972-11-03', 'Male', '555-0102'),
            ('Carmen', 'Diaz', '1990-07-21', 'Female', '555-0103'),
            ('Daniel', 'Kim', '1968-02-09', 'Male', '555-0104'),
            ('Erin', 'Moore', '2001-09-30', 'Female', '555-0105'),
        ]
        patients = []
        for i, (first, last, dob, gender, phone) in enumerate(patients_data):
            patient, created = Patient.objects.get_or_create(
                first_name=first, last_name=last,
                defaults={
                    'date_of_birth': dob,
                    'gender': gender,
                    'phone': phone,
                    'email': f'{first.lower()}.{last.lower()}@example.com',
                    'address': f'{100 + i} Main St',
                },
            )
            patients.append(patient)
            self.stdout.write(f'Patient: {patient}')
        return patients

    def create_appointments(self, patients, rng):
        today = timezone.localdate()
        for patient in patients:
            for offset in (-7, 3):
                Appointment.objects.get_or_create(
                    patient=patient,
                    date_time=self.aware(today + timedelta(days=offset), rng.choice([9, 10, 14, 15])),
                    defaults={'type': rng.choice(['Checkup', 'Follow-up', 'Consultation']),
                              'status': 'Completed' if offset < 0 else 'Scheduled'},
                )

    def create_admissions(self, patients):
        now = timezone.now()
        for i, patient in enumerate(patients[:3]):
            admission, created = Admission.objects.get_or_create(
                patient=patient, room_number=f'{101 + i}',
                defaults={'admission_date': now - timedelta(days=5 - i)},
            )
            if created and i == 0:
                admission.discharge_date = now - timedelta(days=1)
                admission.status = Admission.STATUS_DISCHARGED
                admission.save(update_fields=['discharge_date', 'status'])

    def create_bills(self, patients, rng):
        bills = []
        for patient in patients:
            bill, created = Bill.objects.get_or_create(
                patient=patient, notes='Demo bill',
                defaults={
                    'amount': Decimal(rng.randrange(100, 2000)),
                    'due_date': timezone.now() + timedelta(days=rng.randrange(-10, 30)),
                    'status': rng.choice([Bill.STATUS_PENDING, Bill.STATUS_PAID, Bill.STATUS_OVERDUE]),
                },
            )
            bills.append(bill)
        return bills

    def create_payments(self, bills, rng, days):
        now = timezone.now()
        created = 0
        for bill in bills:
            if bill.payments.exists():
                continue
            for _ in range(rng.randrange(1, 4)):
                Payment.objects.create(
                    bill=bill,
                    amount=Decimal(rng.randrange(20, 400)),
                    payment_date=now - timedelta(days=rng.randrange(0, days)),
                    payment_method=rng.choice(['Cash', 'Card', 'Insurance']),
                    status=rng.choice([Payment.STATUS_COMPLETED, Payment.STATUS_COMPLETED, Payment.STATUS_PENDING]),
                )
                created += 1
        self.stdout.write(f'Payments: {created}')

    def create_claims(self, patients, rng):
        for i, patient in enumerate(patients):
            InsuranceClaim.objects.get_or_create(
                patient=patient, policy_number=f'POL-{1000 + i}',
                defaults={
                    'provider': rng.choice(['BlueCross', 'Aetna', 'Cigna']),
                    'claim_amount': Decimal(rng.randrange(200, 5000)),
                    'status': rng.choice(['Pending', 'Approved', 'Rejected']),
                },
            )

    def create_attendance(self, staff, rng, days):
        today = timezone.localdate()
        created = 0
        for member in staff:
            for offset in range(days):
                day = today - timedelta(days=offset)
                if Attendance.objects.filter(staff=member, date=day).exists():
                    continue
                status = rng.choices(
                    [Attendance.STATUS_PRESENT, Attendance.STATUS_LATE, Attendance.STATUS_ABSENT, Attendance.STATUS_LEAVE],
                    weights=[80, 10, 5, 5],
                )[0]
                record = Attendance(staff=member, date=day, status=status)
                if status in (Attendance.STATUS_PRESENT, Attendance.STATUS_LATE):
                    record.check_in = self.aware(day, 8 if status == Attendance.STATUS_PRESENT else 9, rng.randrange(0, 30))
                    record.check_out = self.aware(day, 17, rng.randrange(0, 30))
                elif status == Attendance.STATUS_LEAVE:
                    record.leave_type = rng.choice(['Sick', 'Annual'])
                    record.leave_reason = 'Demo leave'
                record.save()
                created += 1
        self.stdout.write(f'Attendance records: {created}')

    def create_shifts(self, staff):
        today = timezone.localdate()
        for i, member in enumerate(staff):
            start_hour = (7, 15, 23)[i % 3]
            start = self.aware(today, start_hour)
            Shift.objects.get_or_create(
                staff=member, date=today,
                defaults={'start_time': start, 'end_time': start + timedelta(hours=8)},
            )
