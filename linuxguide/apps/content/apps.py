from django.apps import AppConfig


class ContentConfig(AppConfig):
    name = 'linuxguide.apps.content'
    label = 'content'
    verbose_name = 'Guides, posts and comments'
