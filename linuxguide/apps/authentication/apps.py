from django.apps import AppConfig


class AuthenticationConfig(AppConfig):
    name = 'linuxguide.apps.authentication'
    label = 'authentication'
    verbose_name = 'Authentication'
