from rest_framework import serializers

from .models import Tag
from .services import normalize_tag_names


class TagListField(serializers.Field):
    """
    Reads a post's tags as a sorted list of names. Accepts a list of names
    or a single comma-separated string and hands the serializer the
    normalized, de-duplicated names; at least one is required.
    """

    default_error_messages = {
        'not_a_list': 'Expected a list of tag names but got "{input_type}".',
        'invalid_name': 'Every tag name must be a string.',
        'empty': 'At least one tag is required.',
        'too_long': 'Tag names must be at most {max_length} characters.',
    }
    max_length = Tag._meta.get_field('name').max_length

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = data.split(',')
        elif not isinstance(data, (list, tuple)):
            self.fail('not_a_list', input_type=type(data).__name__)

        if not all(isinstance(name, str) for name in data):
            self.fail('invalid_name')

        names = normalize_tag_names(data)

        if not names:
            self.fail('empty')

        if any(len(name) > self.max_length for name in names):
            self.fail('too_long', max_length=self.max_length)

        return names

    def to_representation(self, value):
        return [tag.name for tag in value.all()]
