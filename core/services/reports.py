"""
Monthly attendance export as CSV.
"""
from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Optional

from django.utils import timezone

from core.services.formatters import full_name
from core.services.workforce import month_label, monthly_attendance

HEADER = ('Date', 'Staff Name', 'Department', 'Check In', 'Check Out', 'Status', 'Leave Type', 'Leave Reason')


def clock(value: Optional[datetime]) -> str:
    if value is None:
        return ''
    return timezone.localtime(value).strftime('%H:%M') if timezone.is_aware(value) else value.strftime('%H:%M')


def attendance_rows(reference_date: date, department: Optional[str] = None):
    records = monthly_attendance(reference_date, department).order_by('date', 'staff__first_name', 'id')
    for record in records:
        yield (
            record.date.isoformat(),
            full_name(record.staff),
            record.staff.department,
            clock(record.check_in),
            clock(record.check_out),
            record.status,
            record.leave_type or '',
            record.leave_reason or '',
        )


def attendance_csv(reference_date: Optional[date] = None, department: Optional[str] = None) -> tuple[str, str]:
    """Return ``(filename, content)`` for the month holding ``reference_date``."""
    reference_date = reference_date or timezone.localdate()
    buf = io.StringIO()
    buf.write(','.join(HEADER) + '\n')
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerows(attendance_rows(reference_date, department))
    return f"attendance-report-{month_label(reference_date)}.csv", buf.getvalue()
