from django.db import models

from linuxguide.apps.core.models import TimestampedModel


class ContactMessage(TimestampedModel):
    name = models.CharField(max_length=255)
    email = models.EmailField()
    message = models.TextField()

    def __str__(self):
        return '{} <{}>'.format(self.name, self.email)
