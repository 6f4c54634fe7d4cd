from datetime import datetime, time

import bleach
from django.utils.dateparse import parse_date
from rest_framework import serializers
from rest_framework.fields import empty


class CleanCharField(serializers.CharField):
    """CharField that strips any markup from free text."""

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        return bleach.clean(value, tags=[], strip=True)


class OptionalTextField(CleanCharField):
    """Optional free text; a missing value or ``null`` becomes ``""``."""

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('default', '')
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        if data is None:
            data = ''
        return super().run_validation(data)


class DayOrDateTimeField(serializers.DateTimeField):
    """Accepts a full timestamp or a bare ``YYYY-MM-DD`` (local midnight)."""

    def to_internal_value(self, value):
        if isinstance(value, str) and len(value.strip()) == 10:
            day = parse_date(value.strip())
            if day is not None:
                value = datetime.combine(day, time.min)
        return super().to_internal_value(value)


def optional_text(max_length=None):
    return OptionalTextField(max_length=max_length)
