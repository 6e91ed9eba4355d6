from django.urls import re_path

from .views import ContactListCreateAPIView

app_name = 'contact'

urlpatterns = [
    re_path(r'^contact/?$', ContactListCreateAPIView.as_view()),
]
