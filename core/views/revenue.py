from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.exceptions import failure_message
from core.serializers.billing import RevenueQuerySerializer, RevenueRangeQuerySerializer
from core.services.revenue import revenue_for_range, revenue_rollup


@api_view(['GET'])
@failure_message('Failed to fetch revenue data')
def revenue(request):
    q = RevenueQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(revenue_rollup(q.validated_data['timeframe']))


@api_view(['GET'])
@failure_message('Failed to fetch revenue data')
def revenue_range(request):
    q = RevenueRangeQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    return Response(revenue_for_range(q.validated_data['startDate'], q.validated_data['endDate']))
