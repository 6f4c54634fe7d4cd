"""
Response formatting (model instance -> wire dict).

Every formatter returns a flat camelCase dict.  Timestamps are ISO 8601
strings, calendar dates ``YYYY-MM-DD``, decimals plain numbers, and an
optional field that is not set comes out as ``""``.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from core.models import (
    Admission,
    Appointment,
    Attendance,
    Bill,
    InsuranceClaim,
    Patient,
    Payment,
    Shift,
    Staff,
)


def full_name(obj) -> str:
    return f"{obj.first_name} {obj.last_name}"


def iso(value: Optional[datetime | date]) -> str:
    return value.isoformat() if value else ''


def money(value: Optional[Decimal]) -> float:
    return float(value) if value is not None else 0.0


def format_patient(patient: Patient, last_appointment: Optional[Appointment] = None) -> dict:
    data = {
        'id': patient.id,
        'firstName': patient.first_name,
        'lastName': patient.last_name,
        'name': full_name(patient),
        'dateOfBirth': iso(patient.date_of_birth),
        'gender': patient.gender,
        'email': patient.email,
        'phone': patient.phone,
        'address': patient.address,
        'status': patient.status,
        'createdAt': iso(patient.created_at),
    }
    data['lastAppointment'] = format_appointment(last_appointment) if last_appointment else None
    return data


def format_appointment(appointment: Appointment) -> dict:
    return {
        'id': appointment.id,
        'patientId': appointment.patient_id,
        'patientName': full_name(appointment.patient),
        'dateTime': iso(appointment.date_time),
        'status': appointment.status,
        'type': appointment.type,
        'notes': appointment.notes,
    }


def admission_status(admission: Admission) -> str:
    return Admission.STATUS_DISCHARGED if admission.discharge_date else Admission.STATUS_ACTIVE


def format_admission(admission: Admission) -> dict:
    return {
        'id': admission.id,
        'patientId': admission.patient_id,
        'patientName': full_name(admission.patient),
        'roomNumber': admission.room_number,
        'admissionDate': iso(admission.admission_date),
        'dischargeDate': iso(admission.discharge_date),
        'status': admission_status(admission),
        'notes': admission.notes,
    }


def format_payment(payment: Payment) -> dict:
    return {
        'id': payment.id,
        'billId': payment.bill_id,
        'amount': money(payment.amount),
        'paymentDate': iso(payment.payment_date),
        'paymentMethod': payment.payment_method,
        'status': payment.status,
        'notes': payment.notes,
    }


def format_bill(bill: Bill, *, with_payments: bool = False) -> dict:
    data = {
        'id': bill.id,
        'patientId': bill.patient_id,
        'patientName': full_name(bill.patient),
        'amount': money(bill.amount),
        'dueDate': iso(bill.due_date),
        'status': bill.status,
        'notes': bill.notes,
        'createdAt': iso(bill.created_at),
    }
    if with_payments:
        data['payments'] = [format_payment(p) for p in bill.payments.order_by('-payment_date')]
    return data


def format_claim(claim: InsuranceClaim) -> dict:
    return {
        'id': claim.id,
        'patientId': claim.patient_id,
        'patientName': full_name(claim.patient),
        'claimNumber': claim.policy_number,
        'insuranceProvider': claim.provider,
        'amount': money(claim.claim_amount),
        'status': claim.status,
        'submittedDate': iso(claim.submission_date),
        'processedDate': iso(claim.response_date),
        'notes': claim.notes,
    }


def format_staff(staff: Staff) -> dict:
    return {
        'id': staff.id,
        'firstName': staff.first_name,
        'lastName': staff.last_name,
        'name': full_name(staff),
        'email': staff.email,
        'department': staff.department,
        'role': staff.role,
        'status': staff.status,
        'joinDate': iso(staff.join_date),
    }


def _staff_ref(staff: Staff) -> dict:
    return {
        'id': staff.id,
        'firstName': staff.first_name,
        'lastName': staff.last_name,
        'department': staff.department,
    }


def format_attendance(record: Attendance) -> dict:
    return {
        'id': record.id,
        'staffId': record.staff_id,
        'staffName': full_name(record.staff),
        'department': record.staff.department,
        'staff': _staff_ref(record.staff),
        'date': iso(record.date),
        'checkIn': iso(record.check_in),
        'checkOut': iso(record.check_out),
        'status': record.status,
        'leaveType': record.leave_type,
        'leaveReason': record.leave_reason,
    }


def format_shift(shift: Shift) -> dict:
    return {
        'id': shift.id,
        'staffId': shift.staff_id,
        'staffName': full_name(shift.staff),
        'department': shift.staff.department,
        'staff': _staff_ref(shift.staff),
        'date': iso(shift.date),
        'startTime': iso(shift.start_time),
        'endTime': iso(shift.end_time),
    }
