from rest_framework import serializers

from core.models import Attendance
from core.serializers.fields import CleanCharField, DayOrDateTimeField, optional_text


class StaffListQuerySerializer(serializers.Serializer):
    department = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    search = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')


class StaffCreateSerializer(serializers.Serializer):
    firstName = CleanCharField(max_length=100)
    lastName = CleanCharField(max_length=100)
    email = serializers.EmailField()
    department = CleanCharField(max_length=100)
    role = CleanCharField(max_length=50)
    status = CleanCharField(required=False, allow_blank=True, max_length=20, default='')
    joinDate = serializers.DateField(required=False, allow_null=True)

    def validate_email(self, v):
        return v.strip().lower()


class DepartmentCreateSerializer(serializers.Serializer):
    name = CleanCharField(max_length=100)
    description = optional_text()


class DayQuerySerializer(serializers.Serializer):
    """``date`` plus the optional department / search filters."""
    date = serializers.DateField(required=False, allow_null=True)
    department = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')
    search = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')


class AttendanceCreateSerializer(serializers.Serializer):
    staffId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    checkIn = DayOrDateTimeField(required=False, allow_null=True)
    checkOut = DayOrDateTimeField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=[c for c, _ in Attendance.STATUS_CHOICES])
    leaveType = optional_text(20)
    leaveReason = optional_text()

    def validate(self, attrs):
        check_in, check_out = attrs.get('checkIn'), attrs.get('checkOut')
        if check_in and check_out and check_out <= check_in:
            raise serializers.ValidationError({'checkOut': 'Check-out must be after check-in'})
        return attrs


class ShiftCreateSerializer(serializers.Serializer):
    staffId = serializers.IntegerField(min_value=1)
    date = serializers.DateField()
    startTime = DayOrDateTimeField()
    endTime = DayOrDateTimeField()
