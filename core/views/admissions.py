"""
Admission views.

The response ``status`` is derived from ``dischargeDate``; discharging
writes the date and the stored status in one update.
"""
from __future__ import annotations

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message, get_or_404
from core.models import Admission, Patient
from core.serializers.patients import AdmissionCreateSerializer, SearchQuerySerializer
from core.services.filters import search_q
from core.services.formatters import format_admission
from core.services.notify import broadcast_change

ADMISSION_SEARCH_FIELDS = ('patient__first_name', 'patient__last_name', 'room_number')


@api_view(['GET', 'POST'])
def admissions(request):
    if request.method == 'POST':
        return create_admission(request)
    return list_admissions(request)


@failure_message('Failed to fetch admissions')
def list_admissions(request):
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = (Admission.objects
          .filter(search_q(q.validated_data['search'], ADMISSION_SEARCH_FIELDS))
          .select_related('patient')
          .order_by('-admission_date', '-id'))
    return Response([format_admission(a) for a in qs])


@failure_message('Failed to create admission')
def create_admission(request):
    s = AdmissionCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient = get_or_404(Patient.objects, v['patientId'], 'Patient not found')
    admission = Admission.objects.create(
        patient=patient,
        room_number=v['roomNumber'],
        notes=v['notes'],
        admission_date=timezone.now(),
        status=Admission.STATUS_ACTIVE,
    )
    broadcast_change('admissions', 'created', admission.id)
    return Response(format_admission(admission), status=status.HTTP_201_CREATED)


@api_view(['PUT'])
@failure_message('Failed to discharge patient')
def discharge_admission(request, admission_id: int):
    admission = get_or_404(Admission.objects.select_related('patient'), admission_id, 'Admission not found')
    admission.discharge_date = timezone.now()
    admission.status = Admission.STATUS_DISCHARGED
    admission.save(update_fields=['discharge_date', 'status'])
    broadcast_change('admissions', 'discharged', admission.id)
    return Response(format_admission(admission))
