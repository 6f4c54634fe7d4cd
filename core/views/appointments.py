from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message, get_or_404
from core.models import Appointment, Patient
from core.serializers.patients import AppointmentCreateSerializer, SearchQuerySerializer
from core.services.filters import search_q
from core.services.formatters import format_appointment
from core.services.notify import broadcast_change

APPOINTMENT_SEARCH_FIELDS = ('patient__first_name', 'patient__last_name', 'type')


@api_view(['GET', 'POST'])
def appointments(request):
    if request.method == 'POST':
        return create_appointment(request)
    return list_appointments(request)


@failure_message('Failed to fetch appointments')
def list_appointments(request):
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = (Appointment.objects
          .filter(search_q(q.validated_data['search'], APPOINTMENT_SEARCH_FIELDS))
          .select_related('patient')
          .order_by('-date_time', '-id'))
    return Response([format_appointment(a) for a in qs])


@failure_message('Failed to create appointment')
def create_appointment(request):
    s = AppointmentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient = get_or_404(Patient.objects, v['patientId'], 'Patient not found')
    appointment = Appointment.objects.create(
        patient=patient,
        date_time=v['dateTime'],
        status='Scheduled',
        type=v['type'],
        notes=v['notes'],
    )
    broadcast_change('appointments', 'created', appointment.id)
    return Response(format_appointment(appointment), status=status.HTTP_201_CREATED)
