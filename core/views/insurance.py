from __future__ import annotations

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message, get_or_404
from core.models import InsuranceClaim, Patient
from core.serializers.billing import ClaimCreateSerializer, ClaimListQuerySerializer
from core.services.filters import combine, search_q, status_q
from core.services.formatters import format_claim
from core.services.notify import broadcast_change

CLAIM_SEARCH_FIELDS = ('policy_number', 'provider', 'patient__first_name', 'patient__last_name')


@api_view(['GET', 'POST'])
def insurance_claims(request):
    if request.method == 'POST':
        return create_claim(request)
    return list_claims(request)


@failure_message('Failed to fetch insurance claims')
def list_claims(request):
    q = ClaimListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    where = combine(
        search_q(q.validated_data['search'], CLAIM_SEARCH_FIELDS),
        status_q(q.validated_data['status']),
    )
    qs = (InsuranceClaim.objects.filter(where)
          .select_related('patient')
          .order_by('-submission_date', '-id'))
    return Response([format_claim(c) for c in qs])


@failure_message('Failed to create insurance claim')
def create_claim(request):
    s = ClaimCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient = get_or_404(Patient.objects, v['patientId'], 'Patient not found')
    claim = InsuranceClaim.objects.create(
        patient=patient,
        provider=v['insuranceProvider'],
        policy_number=v['claimNumber'],
        claim_amount=v['amount'],
        status='Pending',
        submission_date=timezone.now(),
        notes=v['notes'],
    )
    broadcast_change('insurance', 'created', claim.id)
    return Response(format_claim(claim), status=status.HTTP_201_CREATED)
