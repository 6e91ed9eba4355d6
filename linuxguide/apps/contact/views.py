import logging

from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from linuxguide.apps.authentication.permissions import (
    ADMIN_ROLES, HasRequiredRole
)

from .models import ContactMessage
from .renderers import ContactJSONRenderer
from .serializers import ContactMessageSerializer

logger = logging.getLogger(__name__)


class ContactListCreateAPIView(generics.ListCreateAPIView):
    """Anyone may leave a message; only admins may read them."""
    queryset = ContactMessage.objects.all()
    renderer_classes = (ContactJSONRenderer,)
    serializer_class = ContactMessageSerializer
    required_roles = {
        'GET': ADMIN_ROLES,
    }

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAuthenticated(), HasRequiredRole()]

    def create(self, request, *args, **kwargs):
        serializer = self.serializer_class(
            data=request.data.get('contact', {})
        )
        serializer.is_valid(raise_exception=True)
        contact = serializer.save()

        logger.info('Contact message %s received from %s', contact.pk, contact.email)

        return Response(serializer.data, status=status.HTTP_201_CREATED)
