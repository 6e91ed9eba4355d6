from rest_framework import authentication, exceptions

from .models import User
from .services import InvalidToken, TokenService


class JWTAuthentication(authentication.BaseAuthentication):
    authentication_header_prefix = 'Bearer'

    def authenticate(self, request):
        """
        The `authenticate` method is called on every request regardless of
        whether the endpoint requires authentication.

        `authenticate` has two possible return values:

        1) `None` - We return `None` if we do not wish to authenticate. Usually
                    this means we know authentication will fail. An example of
                    this is when the request does not include a token in the
                    headers.

        2) `(user, token)` - We return a user/token combination when
                             authentication is successful.

        If neither case is met, that means there's an error and we do not
        return anything. We simply raise the `AuthenticationFailed` exception
        and let Django REST Framework handle the rest.
        """
        auth_header = authentication.get_authorization_header(request).split()
        auth_header_prefix = self.authentication_header_prefix.lower()

        if not auth_header:
            return None

        if len(auth_header) != 2:
            # Either no credentials were provided after the prefix or the
            # credentials string contains spaces. Neither is a valid token.
            return None

        # The JWT library we're using can't handle the `byte` type, which is
        # commonly used by standard libraries in Python 3. To get around this,
        # we simply have to decode `prefix` and `token`.
        try:
            prefix = auth_header[0].decode('utf-8')
            token = auth_header[1].decode('utf-8')
        except UnicodeError:
            msg = (
                'Invalid token header. Token string should not contain '
                'invalid characters.'
            )
            raise exceptions.AuthenticationFailed(msg)

        if prefix.lower() != auth_header_prefix:
            # The auth header prefix is not what we expected. Do not attempt to
            # authenticate.
            return None

        return self._authenticate_credentials(request, token)

    def authenticate_header(self, request):
        # Returning a challenge makes DRF answer unauthenticated requests with
        # 401 instead of 403.
        return self.authentication_header_prefix

    def _authenticate_credentials(self, request, token):
        """
        Try to authenticate the given credentials. If authentication is
        successful, return the user and token. If not, throw an error.
        """
        try:
            payload = TokenService.decode_token(token)
        except InvalidToken as e:
            raise exceptions.AuthenticationFailed(str(e))

        try:
            user = User.objects.get(pk=payload['id'])
        except User.DoesNotExist:
            msg = 'No user matching this token was found.'
            raise exceptions.AuthenticationFailed(msg)

        if not user.is_active:
            msg = 'This user has been deactivated.'
            raise exceptions.AuthenticationFailed(msg)

        return (user, token)
