from datetime import timedelta

import jwt

from django.conf import settings
from django.test import TestCase, override_settings

from linuxguide.apps.authentication.models import ExperienceLevel, Role, User
from linuxguide.apps.authentication.services import (
    AuthenticationService, InvalidToken, QuizService, TokenExpired,
    TokenService
)


class TokenServiceTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(
            username='tokenuser', password='testpass123', role=Role.ADMIN
        )

    def test_generate_token_returns_string(self):
        token = TokenService.generate_token(self.user)
        self.assertIsInstance(token, str)

    def test_token_contains_user_id_and_role(self):
        token = TokenService.generate_token(self.user)
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=['HS256'])
        self.assertEqual(payload['id'], self.user.pk)
        self.assertEqual(payload['role'], 'admin')
        self.assertIn('exp', payload)

    def test_token_uses_hs256_algorithm(self):
        token = TokenService.generate_token(self.user)
        header = jwt.get_unverified_header(token)
        self.assertEqual(header['alg'], 'HS256')

    def test_decode_returns_payload(self):
        token = TokenService.generate_token(self.user)
        self.assertEqual(TokenService.decode_token(token)['id'], self.user.pk)

    @override_settings(JWT_EXPIRATION_DELTA=timedelta(minutes=-5))
    def test_decode_raises_for_expired_token(self):
        token = TokenService.generate_token(self.user)
        with self.assertRaises(TokenExpired):
            TokenService.decode_token(token)

    def test_decode_raises_for_foreign_signature(self):
        token = jwt.encode(
            {'id': self.user.pk}, 'not-our-secret', algorithm='HS256'
        )
        with self.assertRaises(InvalidToken):
            TokenService.decode_token(token)

    def test_decode_raises_for_garbage(self):
        with self.assertRaises(InvalidToken):
            TokenService.decode_token('not.a.token')

    def test_decode_raises_without_subject(self):
        token = jwt.encode(
            {'role': 'user'}, settings.SECRET_KEY, algorithm='HS256'
        )
        with self.assertRaises(InvalidToken):
            TokenService.decode_token(token)

    def test_expired_is_a_kind_of_invalid(self):
        self.assertTrue(issubclass(TokenExpired, InvalidToken))


class AuthenticationServiceTest(TestCase):

    def setUp(self):
        self.user = User.objects.create_user(
            username='authuser', email='authuser@test.com', password='testpass123'
        )

    def test_authenticate_returns_user_with_valid_credentials(self):
        result = AuthenticationService.authenticate('authuser', 'testpass123')
        self.assertEqual(result, self.user)

    def test_authenticate_raises_on_missing_username(self):
        with self.assertRaises(ValueError) as ctx:
            AuthenticationService.authenticate(None, 'testpass123')
        self.assertIn('username', str(ctx.exception).lower())

    def test_authenticate_raises_on_missing_password(self):
        with self.assertRaises(ValueError) as ctx:
            AuthenticationService.authenticate('authuser', '')
        self.assertIn('password', str(ctx.exception).lower())

    def test_authenticate_raises_on_wrong_password(self):
        with self.assertLogs('linuxguide.apps.authentication.services', 'INFO'):
            with self.assertRaises(ValueError) as ctx:
                AuthenticationService.authenticate('authuser', 'wrongpassword')
        self.assertIn('not found', str(ctx.exception).lower())

    def test_authenticate_raises_on_unknown_username(self):
        with self.assertRaises(ValueError):
            AuthenticationService.authenticate('nobody', 'testpass123')

    def test_authenticate_raises_for_inactive_user(self):
        self.user.is_active = False
        self.user.save()

        with self.assertRaises(ValueError) as ctx:
            AuthenticationService.authenticate('authuser', 'testpass123')
        self.assertIn('deactivated', str(ctx.exception).lower())


class QuizServiceTest(TestCase):

    def test_all_yes_is_advanced(self):
        answers = {'sudo': 'yes', 'terminal': 'yes', 'kernel': 'yes'}
        self.assertEqual(
            QuizService.level_for_answers(answers), ExperienceLevel.ADVANCED
        )

    def test_two_yes_is_novice(self):
        answers = {'sudo': 'Yes', 'terminal': ' yes ', 'kernel': 'no'}
        self.assertEqual(
            QuizService.level_for_answers(answers), ExperienceLevel.NOVICE
        )

    def test_one_yes_is_beginner(self):
        answers = {'sudo': 'yes', 'terminal': 'no'}
        self.assertEqual(
            QuizService.level_for_answers(answers), ExperienceLevel.BEGINNER
        )

    def test_no_answers_is_beginner(self):
        self.assertEqual(
            QuizService.level_for_answers({}), ExperienceLevel.BEGINNER
        )

    def test_set_experience_level_persists(self):
        user = User.objects.create_user(username='quizzer', password='testpass123')
        QuizService.set_experience_level(user, ExperienceLevel.NOVICE)

        user.refresh_from_db()
        self.assertEqual(user.experience_level, ExperienceLevel.NOVICE)
