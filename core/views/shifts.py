from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message, get_or_404
from core.models import Shift, Staff
from core.serializers.staff import DayQuerySerializer, ShiftCreateSerializer
from core.services.filters import combine, day_q, department_q
from core.services.formatters import format_shift
from core.services.notify import broadcast_change


@api_view(['GET', 'POST'])
def shifts(request):
    if request.method == 'POST':
        return create_shift(request)
    return list_shifts(request)


@failure_message('Failed to fetch shifts')
def list_shifts(request):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    where = combine(
        day_q('date', q.validated_data.get('date')),
        department_q(q.validated_data['department'], 'staff__department'),
    )
    qs = Shift.objects.filter(where).select_related('staff').order_by('-date', 'start_time', 'id')
    return Response([format_shift(s) for s in qs])


@failure_message('Failed to create shift')
def create_shift(request):
    s = ShiftCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    member = get_or_404(Staff.objects, v['staffId'], 'Staff not found')
    shift = Shift(staff=member, date=v['date'], start_time=v['startTime'], end_time=v['endTime'])
    shift.clean()
    shift.save()
    broadcast_change('shifts', 'created', shift.id)
    return Response(format_shift(shift), status=status.HTTP_201_CREATED)
