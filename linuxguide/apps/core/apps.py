from django.apps import AppConfig


class CoreConfig(AppConfig):
    name = 'linuxguide.apps.core'
    label = 'core'
    verbose_name = 'Core'
