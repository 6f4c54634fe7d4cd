"""
Billing views: bills, their status and the payments recorded against them.

A bill's status is set by hand through ``PATCH``; recording a payment
leaves it unchanged.
"""
from __future__ import annotations

from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message, get_or_404
from core.models import Bill, Patient, Payment
from core.serializers.billing import BillCreateSerializer, BillStatusSerializer, PaymentCreateSerializer
from core.serializers.patients import SearchQuerySerializer
from core.services.filters import search_q
from core.services.formatters import format_bill, format_payment
from core.services.notify import broadcast_change

BILL_SEARCH_FIELDS = ('patient__first_name', 'patient__last_name', 'status')


@api_view(['GET', 'POST'])
def bills(request):
    if request.method == 'POST':
        return create_bill(request)
    return list_bills(request)


@failure_message('Failed to fetch bills')
def list_bills(request):
    q = SearchQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    qs = (Bill.objects
          .filter(search_q(q.validated_data['search'], BILL_SEARCH_FIELDS))
          .select_related('patient')
          .order_by('-created_at', '-id'))
    return Response([format_bill(b) for b in qs])


@failure_message('Failed to create bill')
def create_bill(request):
    s = BillCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    patient = get_or_404(Patient.objects, v['patientId'], 'Patient not found')
    bill = Bill.objects.create(
        patient=patient,
        amount=v['amount'],
        due_date=v['dueDate'],
        status=Bill.STATUS_PENDING,
        notes=v['notes'],
    )
    broadcast_change('bills', 'created', bill.id)
    return Response(format_bill(bill), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PATCH'])
def bill_detail(request, bill_id: int):
    if request.method == 'PATCH':
        return update_bill_status(request, bill_id)
    return get_bill(request, bill_id)


@failure_message('Failed to fetch bill details')
def get_bill(request, bill_id: int):
    bill = get_or_404(Bill.objects.select_related('patient'), bill_id, 'Bill not found')
    return Response(format_bill(bill, with_payments=True))


@failure_message('Failed to update bill')
def update_bill_status(request, bill_id: int):
    s = BillStatusSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    bill = get_or_404(Bill.objects.select_related('patient'), bill_id, 'Bill not found')
    bill.status = s.validated_data['status']
    bill.save(update_fields=['status'])
    broadcast_change('bills', 'updated', bill.id)
    return Response(format_bill(bill, with_payments=True))


@api_view(['POST'])
@failure_message('Failed to record payment')
def record_payment(request, bill_id: int):
    bill = get_or_404(Bill.objects, bill_id, 'Bill not found')
    s = PaymentCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    payment = Payment.objects.create(
        bill=bill,
        amount=v['amount'],
        payment_date=v.get('paymentDate') or timezone.now(),
        payment_method=v['paymentMethod'],
        status=v['status'],
        notes=v['notes'],
    )
    broadcast_change('payments', 'created', payment.id)
    return Response(format_payment(payment), status=status.HTTP_201_CREATED)
