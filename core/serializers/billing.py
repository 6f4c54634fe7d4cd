from rest_framework import serializers

from core.models import Bill, Payment
from core.serializers.fields import CleanCharField, DayOrDateTimeField, optional_text
from core.services.revenue import DEFAULT_TIMEFRAME, TIMEFRAMES


class BillCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    dueDate = DayOrDateTimeField()
    notes = optional_text()


class BillStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[c for c, _ in Bill.STATUS_CHOICES])


class PaymentCreateSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    paymentMethod = optional_text(50)
    paymentDate = DayOrDateTimeField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=[c for c, _ in Payment.STATUS_CHOICES], default=Payment.STATUS_COMPLETED)
    notes = optional_text()

    def validate_amount(self, v):
        if v <= 0:
            raise serializers.ValidationError('Amount must be greater than zero')
        return v


class ClaimListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    status = serializers.CharField(required=False, allow_blank=True, max_length=20, default='')


class ClaimCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    insuranceProvider = CleanCharField(max_length=255)
    claimNumber = CleanCharField(max_length=100)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    notes = optional_text()


class RevenueQuerySerializer(serializers.Serializer):
    timeframe = serializers.ChoiceField(choices=TIMEFRAMES, required=False, allow_blank=True, default=DEFAULT_TIMEFRAME)

    def validate_timeframe(self, v):
        return v or DEFAULT_TIMEFRAME


class RevenueRangeQuerySerializer(serializers.Serializer):
    startDate = serializers.DateField()
    endDate = serializers.DateField()

    def validate(self, attrs):
        if attrs['endDate'] < attrs['startDate']:
            raise serializers.ValidationError('endDate must not be before startDate')
        return attrs
