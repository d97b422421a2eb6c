# core/serializers.py
from rest_framework import serializers


class StrictCharField(serializers.CharField):
    """CharField that rejects numbers instead of coercing them to strings."""

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid')
        return super().to_internal_value(data)


class StrictIntegerField(serializers.IntegerField):
    """IntegerField that only accepts JSON integers (no strings, floats or booleans)."""

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail('invalid')
        return super().to_internal_value(data)


def optional(field_class, **kwargs):
    """
    Admin payload fields are all optional at the serializer level; the
    services report missing fields with their own messages.
    """
    kwargs.setdefault('required', False)
    kwargs.setdefault('allow_null', True)
    if issubclass(field_class, serializers.CharField):
        kwargs.setdefault('allow_blank', True)
    return field_class(**kwargs)
