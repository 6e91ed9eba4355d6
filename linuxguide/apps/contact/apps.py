from django.apps import AppConfig


class ContactConfig(AppConfig):
    name = 'linuxguide.apps.contact'
    label = 'contact'
    verbose_name = 'Contact messages'
