from rest_framework import serializers

from core.serializers.fields import CleanCharField, DayOrDateTimeField, optional_text


class SearchQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=100, default='')


class PatientCreateSerializer(serializers.Serializer):
    firstName = CleanCharField(max_length=100)
    lastName = CleanCharField(max_length=100)
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    gender = optional_text(20)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = optional_text(32)
    address = optional_text()

    def validate_phone(self, v):
        return v.strip()


class AppointmentCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    dateTime = DayOrDateTimeField()
    type = optional_text(100)
    notes = optional_text()


class AdmissionCreateSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    roomNumber = CleanCharField(max_length=20)
    notes = optional_text()
