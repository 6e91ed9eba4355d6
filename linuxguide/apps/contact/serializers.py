from rest_framework import serializers

from .models import ContactMessage


class ContactMessageSerializer(serializers.ModelSerializer):
    createdAt = serializers.SerializerMethodField(method_name='get_created_at')

    class Meta:
        model = ContactMessage
        fields = ('id', 'name', 'email', 'message', 'createdAt')

    def get_created_at(self, instance):
        return instance.created_at.isoformat()
