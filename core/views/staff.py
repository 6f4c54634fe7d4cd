"""
Staff directory and roster views.
"""
from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import Conflict, failure_message
from core.models import Staff
from core.serializers.staff import DayQuerySerializer, StaffCreateSerializer, StaffListQuerySerializer
from core.services.filters import combine, department_q, search_q
from core.services.formatters import format_staff
from core.services.notify import broadcast_change
from core.services.seed import seed_staff
from core.services.workforce import roster_snapshot

logger = logging.getLogger(__name__)

STAFF_SEARCH_FIELDS = ('first_name', 'last_name', 'email')


@api_view(['GET', 'POST'])
def staff(request):
    if request.method == 'POST':
        return create_staff(request)
    return list_staff(request)


@failure_message('Failed to fetch staff')
def list_staff(request):
    q = StaffListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    where = combine(
        department_q(q.validated_data['department']),
        search_q(q.validated_data['search'], STAFF_SEARCH_FIELDS),
    )
    qs = Staff.objects.filter(where).order_by('last_name', 'first_name', 'id')
    return Response([format_staff(s) for s in qs])


@failure_message('Failed to create staff')
def create_staff(request):
    s = StaffCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    v = s.validated_data
    if Staff.objects.filter(email__iexact=v['email']).exists():
        raise Conflict('Email already exists')
    try:
        with transaction.atomic():
            member = Staff.objects.create(
                first_name=v['firstName'],
                last_name=v['lastName'],
                email=v['email'],
                department=v['department'],
                role=v['role'],
                status=v['status'] or 'Active',
                join_date=v.get('joinDate') or timezone.localdate(),
            )
    except IntegrityError:
        # lost a race with a concurrent create for the same email
        raise Conflict('Email already exists')
    broadcast_change('staff', 'created', member.id)
    return Response(format_staff(member), status=status.HTTP_201_CREATED)


@api_view(['POST'])
@failure_message('Failed to seed database')
def seed(request):
    created = seed_staff()
    if not created:
        return Response({'message': 'Staff already seeded', 'created': 0})
    logger.info('Seeded %d staff members', created)
    broadcast_change('staff', 'seeded')
    return Response({'message': 'Database seeded successfully', 'created': created})


@api_view(['GET'])
@failure_message('Failed to fetch initial data')
def initial_data(request):
    q = DayQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(roster_snapshot(q.validated_data.get('date')))
