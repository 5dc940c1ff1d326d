from rest_framework import serializers


def parse_tech_stack(value):
    """
    Normalize tech stack input into an ordered list of tags.

    Accepts a comma separated string or a list of strings. Items are trimmed
    and empty ones dropped; order and repeated tags are kept as given.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(',')
    else:
        items = value
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def format_tech_stack(tags):
    return ', '.join(tags or [])


class TechStackField(serializers.Field):
    default_error_messages = {
        'invalid': 'Expected a comma separated string or a list of strings.',
    }

    def to_internal_value(self, data):
        if not isinstance(data, (str, list, tuple)):
            self.fail('invalid')
        if isinstance(data, (list, tuple)) and not all(isinstance(item, str) for item in data):
            self.fail('invalid')
        return parse_tech_stack(data)

    def to_representation(self, value):
        return list(value or [])
