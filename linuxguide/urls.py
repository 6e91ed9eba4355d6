from django.urls import include, path

urlpatterns = [
    path('api/', include('linuxguide.apps.authentication.urls', namespace='authentication')),
    path('api/', include('linuxguide.apps.content.urls', namespace='content')),
    path('api/', include('linuxguide.apps.contact.urls', namespace='contact')),
]
