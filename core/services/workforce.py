"""
Staff rollups: monthly attendance figures and per-department shift
coverage for the roster view.
"""
from __future__ import annotations

import calendar
import math
from collections import Counter
from datetime import date
from typing import Iterable, Optional

from django.db.models import Q
from django.utils import timezone

from core.models import Attendance, Shift, Staff
from core.services.filters import department_q, department_value, range_q
from core.services.formatters import format_shift, format_staff
from core.services.revenue import month_window

# Share of a department's shifts that must be staffed.
REQUIRED_RATIO = 0.7
# Coverage below this percentage is flagged in the roster view.
LOW_COVERAGE_THRESHOLD = 70


def month_label(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def monthly_attendance(reference_date: date, department: Optional[str] = None):
    """Attendance rows for the calendar month holding ``reference_date``."""
    window = month_window(reference_date)
    q = range_q('date', window.first_day, window.last_day) & department_q(department, 'staff__department')
    return Attendance.objects.filter(q).select_related('staff')


def attendance_rate(attended: int, staff_count: int, days_in_month: int) -> float:
    if staff_count <= 0 or days_in_month <= 0:
        return 0.0
    rate = attended / (staff_count * days_in_month) * 100
    return round(min(max(rate, 0.0), 100.0), 2)


def attendance_stats(reference_date: Optional[date] = None, department: Optional[str] = None) -> dict:
    reference_date = reference_date or timezone.localdate()
    days_in_month = calendar.monthrange(reference_date.year, reference_date.month)[1]

    counts = Counter(monthly_attendance(reference_date, department).values_list('status', flat=True))
    staff_count = Staff.objects.filter(department_q(department)).count()

    present = counts[Attendance.STATUS_PRESENT]
    late = counts[Attendance.STATUS_LATE]
    return {
        'present': present,
        'absent': counts[Attendance.STATUS_ABSENT],
        'late': late,
        'leave': counts[Attendance.STATUS_LEAVE],
        'attendanceRate': attendance_rate(present + late, staff_count, days_in_month),
        'staffCount': staff_count,
        'daysInMonth': days_in_month,
        'month': month_label(reference_date),
        'department': department_value(department) or '',
    }


def required_staff(shift_count: int) -> int:
    # round first so 10 * 0.7 stays 7 instead of ceil(7.000000000000001)
    return math.ceil(round(shift_count * REQUIRED_RATIO, 6))


def coverage_percent(current: int, required: int) -> int:
    """Staffed share of ``required`` as a whole percentage, capped at 100.

    No required staff means the department is fully covered.
    """
    if required == 0:
        return 100
    return min(math.floor(current / required * 100 + 0.5), 100)


def department_workload(staff: Iterable[Staff], shifts: Iterable[Shift]) -> list[dict]:
    staff_per_dept = Counter(s.department for s in staff)
    shifts_per_dept = Counter(s.staff.department for s in shifts)

    workload = []
    for dept in sorted(staff_per_dept):
        shifts_in_dept = shifts_per_dept[dept]
        required = required_staff(shifts_in_dept)
        coverage = coverage_percent(staff_per_dept[dept], required)
        workload.append({
            'department': dept,
            'requiredStaff': required,
            'currentStaff': staff_per_dept[dept],
            'shiftsInDept': shifts_in_dept,
            'coverage': coverage,
            'lowCoverage': coverage < LOW_COVERAGE_THRESHOLD,
        })
    return workload


def roster_snapshot(day: Optional[date] = None) -> dict:
    day = day or timezone.localdate()
    shifts = list(Shift.objects.filter(Q(date=day)).select_related('staff').order_by('start_time', 'id'))
    staff = list(Staff.objects.order_by('last_name', 'first_name', 'id'))
    return {
        'date': day.isoformat(),
        'shifts': [format_shift(s) for s in shifts],
        'staff': [format_staff(s) for s in staff],
        'departmentWorkload': department_workload(staff, shifts),
    }
