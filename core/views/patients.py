"""
Patient record views.

``GET /api/patients`` lists patients newest first, each with its most
recent appointment; ``POST`` registers a new patient.
"""
from __future__ import annotations

from django.db.models import Prefetch
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message
from core.models import Appointment, Patient
from core.serializers.patients import PatientCreateSerializer, SearchQuerySerializer
from core.services.filters import search_q
from core.services.formatters import format_patient
from core.services.notify import broadcast_change

PATIENT_SEARCH_FIELDS = ('first_name', 'last_name', 'phone')


@api_view(['GET', 'POST'])
def patients(request):
    if request.method == 'POST':
        return create_patient(request)
    return list_patients(request)


@failure_message('Failed to fetch patients')
def list_patients(request):
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = (Patient.objects
          .filter(search_q(q.validated_data['search'], PATIENT_SEARCH_FIELDS))
          .prefetch_related(Prefetch('appointments', queryset=Appointment.objects.order_by('-date_time', '-id')))
          .order_by('-created_at', '-id'))
    data = []
    for patient in qs:
        appointments = list(patient.appointments.all())
        data.append(format_patient(patient, appointments[0] if appointments else None))
    return Response(data)


@failure_message('Failed to create patient')
def create_patient(request):
    s = PatientCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient = Patient.objects.create(
        first_name=v['firstName'],
        last_name=v['lastName'],
        date_of_birth=v.get('dateOfBirth'),
        gender=v['gender'],
        email=v['email'],
        phone=v['phone'],
        address=v['address'],
        status='Active',
    )
    broadcast_change('patients', 'created', patient.id)
    return Response(format_patient(patient), status=status.HTTP_201_CREATED)
