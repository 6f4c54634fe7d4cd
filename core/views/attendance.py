"""
Attendance views: daily records, the monthly rollup and the CSV export.
"""
from __future__ import annotations

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message, get_or_404
from core.models import Attendance, Staff
from core.serializers.staff import AttendanceCreateSerializer, DayQuerySerializer
from core.services.filters import combine, day_q, department_q, search_q
from core.services.formatters import format_attendance
from core.services.notify import broadcast_change
from core.services.reports import attendance_csv
from core.services.workforce import attendance_stats

ATTENDANCE_SEARCH_FIELDS = ('staff__first_name', 'staff__last_name')


@api_view(['GET', 'POST'])
def attendance(request):
    if request.method == 'POST':
        return mark_attendance(request)
    return list_attendance(request)


@failure_message('Failed to fetch attendance')
def list_attendance(request):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    v = q.validated_data
    where = combine(
        day_q('date', v.get('date')),
        department_q(v['department'], 'staff__department'),
        search_q(v['search'], ATTENDANCE_SEARCH_FIELDS),
    )
    qs = Attendance.objects.filter(where).select_related('staff').order_by('-date', 'staff__first_name', 'id')
    return Response([format_attendance(r) for r in qs])


@failure_message('Failed to create attendance')
def mark_attendance(request):
    s = AttendanceCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    member = get_or_404(Staff.objects, v['staffId'], 'Staff not found')
    record = Attendance.objects.create(
        staff=member,
        date=v['date'],
        check_in=v.get('checkIn'),
        check_out=v.get('checkOut'),
        status=v['status'],
        leave_type=v['leaveType'],
        leave_reason=v['leaveReason'],
    )
    broadcast_change('attendance', 'created', record.id)
    return Response(format_attendance(record), status=status.HTTP_201_CREATED)


@api_view(['GET'])
@failure_message('Failed to fetch attendance stats')
def attendance_summary(request):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(attendance_stats(q.validated_data.get('date'), q.validated_data['department']))


@api_view(['GET'])
@failure_message('Failed to generate attendance report')
def attendance_report(request):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    filename, content = attendance_csv(q.validated_data.get('date'), q.validated_data['department'])
    response = HttpResponse(content, content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename={filename}'
    return response
