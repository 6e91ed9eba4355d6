from django.contrib.auth.models import (
    AbstractBaseUser, BaseUserManager, PermissionsMixin
)
from django.db import models

from linuxguide.apps.core.models import TimestampedModel


class Role(models.TextChoices):
    SUPER_ADMIN = 'super_admin', 'Super admin'
    ADMIN = 'admin', 'Admin'
    USER = 'user', 'User'


class ExperienceLevel(models.TextChoices):
    BEGINNER = 'beginner', 'Beginner'
    NOVICE = 'novice', 'Novice'
    ADVANCED = 'advanced', 'Advanced'


class UserManager(BaseUserManager):
    """
    Django requires that custom users define their own Manager class. By
    inheriting from `BaseUserManager`, we get a lot of the same code used by
    Django to create a `User` for free.

    All we have to do is override `create_user` and `create_superuser`, which
    we use to create `User` objects.
    """

    def create_user(self, username, password=None, email=None, role=Role.USER):
        """Create and return a `User` with a username, optional email and role."""
        if username is None:
            raise TypeError('Users must have a username.')

        if role not in Role.values:
            raise ValueError('Unknown role: {}.'.format(role))

        user = self.model(
            username=username,
            email=self.normalize_email(email) if email else None,
            role=role,
        )
        user.set_password(password)
        user.save()

        return user

    def create_superuser(self, username, password, email=None):
        """
        Create and return a `User` with superuser powers. A superuser is
        always a super_admin as far as the API is concerned.
        """
        if password is None:
            raise TypeError('Superusers must have a password.')

        user = self.create_user(
            username, password, email=email, role=Role.SUPER_ADMIN
        )
        user.is_superuser = True
        user.is_staff = True
        user.save()

        return user


class User(AbstractBaseUser, PermissionsMixin, TimestampedModel):
    # Each `User` needs a human-readable unique identifier that we can use to
    # represent the `User` in the UI and to log in with.
    username = models.CharField(db_index=True, max_length=255, unique=True)

    # Email is optional. When present it must be unique; NULLs never collide.
    email = models.EmailField(
        db_index=True, unique=True, null=True, blank=True
    )

    role = models.CharField(
        max_length=20, choices=Role.choices, default=Role.USER
    )

    # Set from the onboarding quiz. Only used to recommend guides.
    experience_level = models.CharField(
        max_length=20,
        choices=ExperienceLevel.choices,
        default=ExperienceLevel.BEGINNER,
    )

    # Deactivated users can neither log in nor use an existing token. Rows
    # are only removed through the explicit admin delete endpoint.
    is_active = models.BooleanField(default=True)

    # The `is_staff` flag is expected by Django to determine who can and cannot
    # log into the Django admin site.
    is_staff = models.BooleanField(default=False)

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    # Tells Django that the UserManager class defined above should manage
    # objects of this type.
    objects = UserManager()

    def __str__(self):
        return self.username

    @property
    def token(self):
        """
        A fresh JWT for this user. Kept on the model so serializers can expose
        it as a read-only field; the signing itself lives in TokenService.
        """
        from .services import TokenService
        return TokenService.generate_token(self)

    @property
    def is_admin(self):
        return self.role in (Role.ADMIN, Role.SUPER_ADMIN)

    def get_full_name(self):
        return self.username

    def get_short_name(self):
        return self.username
