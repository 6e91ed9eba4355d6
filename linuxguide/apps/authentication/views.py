import logging

from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import User
from .permissions import ADMIN_ROLES, SUPER_ADMIN_ONLY, HasRequiredRole
from .renderers import UserJSONRenderer
from .serializers import (
    AdminRegistrationSerializer, AdminUserSerializer, ExperienceSerializer,
    LoginSerializer, RegistrationSerializer, UserSerializer
)

logger = logging.getLogger(__name__)


class RegistrationAPIView(APIView):
    # Allow any user (authenticated or not) to hit this endpoint.
    permission_classes = (AllowAny,)
    renderer_classes = (UserJSONRenderer,)
    serializer_class = RegistrationSerializer

    def post(self, request):
        user = request.data.get('user', {})

        serializer = self.serializer_class(data=user)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info('Registered user %s', serializer.data['username'])

        return Response(serializer.data, status=status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    permission_classes = (AllowAny,)
    renderer_classes = (UserJSONRenderer,)
    serializer_class = LoginSerializer

    def post(self, request):
        user = request.data.get('user', {})

        # Notice here that we do not call `serializer.save()` like we did for
        # the registration endpoint. This is because we don't actually have
        # anything to save. Instead, the `validate` method on our serializer
        # handles everything we need.
        serializer = self.serializer_class(data=user)
        serializer.is_valid(raise_exception=True)

        return Response(serializer.data, status=status.HTTP_200_OK)


class UserRetrieveUpdateAPIView(generics.RetrieveUpdateAPIView):
    permission_classes = (IsAuthenticated,)
    renderer_classes = (UserJSONRenderer,)
    serializer_class = UserSerializer

    def retrieve(self, request, *args, **kwargs):
        # There is nothing to validate or save here. Instead, we just want the
        # serializer to handle turning our `User` object into something that
        # can be JSONified and sent to the client.
        serializer = self.serializer_class(request.user)

        return Response(serializer.data, status=status.HTTP_200_OK)

    def update(self, request, *args, **kwargs):
        serializer_data = request.data.get('user', {})

        serializer = self.serializer_class(
            request.user, data=serializer_data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info('User %s updated their account', request.user.pk)

        return Response(serializer.data, status=status.HTTP_200_OK)


class UserExperienceAPIView(APIView):
    """Records the authenticated user's experience level."""
    permission_classes = (IsAuthenticated,)
    renderer_classes = (UserJSONRenderer,)
    serializer_class = ExperienceSerializer

    def post(self, request):
        serializer = self.serializer_class(
            data=request.data.get('user', {})
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save(request.user)

        return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


class AdminUserListCreateAPIView(generics.ListCreateAPIView):
    permission_classes = (IsAuthenticated, HasRequiredRole)
    required_roles = {
        'GET': ADMIN_ROLES,
        'POST': SUPER_ADMIN_ONLY,
    }
    queryset = User.objects.order_by('username')
    renderer_classes = (UserJSONRenderer,)
    serializer_class = AdminUserSerializer

    def create(self, request):
        serializer = AdminRegistrationSerializer(
            data=request.data.get('user', {})
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(
            'User %s created user %s with role %s',
            request.user.pk, user.pk, user.role,
        )

        return Response(serializer.data, status=status.HTTP_201_CREATED)


class AdminUserDetailAPIView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = (IsAuthenticated, HasRequiredRole)
    required_roles = {
        'GET': ADMIN_ROLES,
        'PUT': SUPER_ADMIN_ONLY,
        'PATCH': SUPER_ADMIN_ONLY,
        'DELETE': SUPER_ADMIN_ONLY,
    }
    queryset = User.objects.all()
    lookup_url_kwarg = 'user_pk'
    renderer_classes = (UserJSONRenderer,)
    serializer_class = AdminUserSerializer

    def update(self, request, *args, **kwargs):
        user = self.get_object()

        serializer = self.serializer_class(
            user, data=request.data.get('user', {}), partial=True
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info('User %s updated user %s', request.user.pk, user.pk)

        return Response(serializer.data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        user_pk = user.pk

        user.delete()

        logger.info('User %s deleted user %s', request.user.pk, user_pk)

        return Response(None, status=status.HTTP_204_NO_CONTENT)
