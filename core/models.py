"""
Database models for the hospital dashboard backend.

These models capture the records the dashboard works with: patients
and their appointments, admissions, bills, payments and insurance
claims, plus staff with their attendance and shifts.  Field names
follow Django conventions; the camelCase wire names are produced by
:mod:`core.services.formatters`.

Departments are not modelled separately.  A department is whatever
free-text value staff rows carry in :attr:`Staff.department`.
"""
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


class Patient(models.Model):
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    address = models.TextField(blank=True)
    status = models.CharField(max_length=20, default='Active')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['last_name', 'first_name']),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Staff(models.Model):
    """A member of the hospital workforce.

    ``department`` is a denormalised tag: renaming a department means
    updating every staff row that carries it.
    """
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    department = models.CharField(max_length=100, db_index=True)
    role = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=20, default='Active')
    join_date = models.DateField(default=timezone.localdate)

    class Meta:
        verbose_name_plural = 'staff'

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.department})"


class Appointment(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    date_time = models.DateTimeField()
    status = models.CharField(max_length=20, default='Scheduled')
    type = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['patient', 'date_time']),
        ]

    def __str__(self) -> str:
        return f"Appointment({self.patient_id}) @ {self.date_time:%F %T}"


class Admission(models.Model):
    """An inpatient stay.

    ``status`` is stored, but responses derive it from
    ``discharge_date``; the discharge endpoint writes both together.
    """
    STATUS_ACTIVE = 'Active'
    STATUS_DISCHARGED = 'Discharged'
    STATUS_CHOICES = ((STATUS_ACTIVE, 'Active'), (STATUS_DISCHARGED, 'Discharged'))

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='admissions')
    room_number = models.CharField(max_length=20, blank=True)
    admission_date = models.DateTimeField(default=timezone.now)
    discharge_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Admission({self.patient_id}) room={self.room_number}"


class Bill(models.Model):
    STATUS_PENDING = 'Pending'
    STATUS_PAID = 'Paid'
    STATUS_OVERDUE = 'Overdue'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
        (STATUS_OVERDUE, 'Overdue'),
    )

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='bills')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    due_date = models.DateTimeField()
    # Set by hand; recording a payment does not change it.
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"Bill #{self.id} {self.amount} ({self.status})"


class Payment(models.Model):
    STATUS_PENDING = 'Pending'
    STATUS_COMPLETED = 'Completed'
    STATUS_FAILED = 'Failed'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
    )

    bill = models.ForeignKey(Bill, on_delete=models.CASCADE, related_name='payments')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payment_date = models.DateTimeField(default=timezone.now, db_index=True)
    payment_method = models.CharField(max_length=50, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_COMPLETED)
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Payment({self.bill_id}) {self.amount} @ {self.payment_date:%F}"


class InsuranceClaim(models.Model):
    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='insurance_claims')
    provider = models.CharField(max_length=255)
    policy_number = models.CharField(max_length=100)
    claim_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, default='Pending', db_index=True)
    submission_date = models.DateTimeField(default=timezone.now)
    response_date = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Claim {self.policy_number} ({self.status})"


class Attendance(models.Model):
    STATUS_PRESENT = 'Present'
    STATUS_ABSENT = 'Absent'
    STATUS_LATE = 'Late'
    STATUS_LEAVE = 'Leave'
    STATUS_CHOICES = (
        (STATUS_PRESENT, 'Present'),
        (STATUS_ABSENT, 'Absent'),
        (STATUS_LATE, 'Late'),
        (STATUS_LEAVE, 'Leave'),
    )

    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='attendance')
    date = models.DateField()
    check_in = models.DateTimeField(null=True, blank=True)
    check_out = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES)
    leave_type = models.CharField(max_length=20, blank=True)
    leave_reason = models.TextField(blank=True)

    class Meta:
        indexes = [
            models.Index(fields=['date', 'staff']),
        ]

    def __str__(self) -> str:
        return f"Attendance({self.staff_id}) {self.date:%F} {self.status}"


class Shift(models.Model):
    staff = models.ForeignKey(Staff, on_delete=models.CASCADE, related_name='shifts')
    date = models.DateField()
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()

    class Meta:
        indexes = [
            models.Index(fields=['date', 'start_time']),
        ]

    def clean(self) -> None:
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValidationError({'endTime': 'End time must be after start time'})

    def __str__(self) -> str:
        return f"Shift(s={self.staff_id}, {self.start_time:%F %T}~{self.end_time:%F %T})"
