import logging

import jwt

from datetime import datetime

from django.conf import settings
from django.contrib.auth import authenticate as django_authenticate

from .models import ExperienceLevel

logger = logging.getLogger(__name__)


class InvalidToken(Exception):
    pass


class TokenExpired(InvalidToken):
    pass


class TokenService:
    """
    Signs and verifies the JWTs handed out at login.

    The payload carries the user's id and the role they had when the token
    was issued. The role claim is informational for clients only: the
    authentication backend reloads the user on every request, so role checks
    always see the role currently stored.
    """

    ALGORITHM = 'HS256'

    @classmethod
    def generate_token(cls, user):
        """Generate a JWT token for the given user."""
        dt = datetime.now() + settings.JWT_EXPIRATION_DELTA

        payload = {
            'id': user.pk,
            'role': user.role,
            'exp': int(dt.timestamp())
        }

        return jwt.encode(
            payload, settings.SECRET_KEY, algorithm=cls.ALGORITHM
        )

    @classmethod
    def decode_token(cls, token):
        """
        Return the verified payload of `token`.

        Raises TokenExpired for a well-formed token past its expiry and
        InvalidToken for anything else that fails verification.
        """
        try:
            payload = jwt.decode(
                token, settings.SECRET_KEY, algorithms=[cls.ALGORITHM]
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpired('Token has expired.')
        except jwt.InvalidTokenError:
            raise InvalidToken('Invalid authentication. Could not decode token.')

        if 'id' not in payload:
            raise InvalidToken('Invalid authentication. Token has no subject.')

        return payload


class AuthenticationService:
    """
    Login logic, kept out of LoginSerializer so the serializer only validates
    input and shapes the response.
    """

    @staticmethod
    def authenticate(username, password):
        """
        Authenticate a user by username and password.

        Raises ValueError with a descriptive message on failure, allowing
        the caller (serializer) to translate it into the appropriate
        framework-specific error response.
        """
        if not username:
            raise ValueError('A username is required to log in.')

        if not password:
            raise ValueError('A password is required to log in.')

        user = django_authenticate(username=username, password=password)

        if user is None:
            logger.info('Failed login attempt for %r', username)
            raise ValueError(
                'A user with this username and password was not found.'
            )

        if not user.is_active:
            raise ValueError('This user has been deactivated.')

        return user


class QuizService:
    """Turns onboarding quiz answers into an experience level."""

    QUESTIONS = ('sudo', 'terminal', 'kernel')

    @classmethod
    def score(cls, answers):
        return sum(
            1 for question in cls.QUESTIONS
            if str(answers.get(question, '')).strip().lower() == 'yes'
        )

    @classmethod
    def level_for_answers(cls, answers):
        score = cls.score(answers)

        if score == len(cls.QUESTIONS):
            return ExperienceLevel.ADVANCED
        if score >= 2:
            return ExperienceLevel.NOVICE
        return ExperienceLevel.BEGINNER

    @staticmethod
    def set_experience_level(user, level):
        user.experience_level = level
        user.save(update_fields=['experience_level', 'updated_at'])
        logger.info('User %s experience level set to %s', user.pk, level)
        return user
