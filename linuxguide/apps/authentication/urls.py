from django.urls import re_path

from .views import (
    AdminUserDetailAPIView, AdminUserListCreateAPIView, LoginAPIView,
    RegistrationAPIView, UserExperienceAPIView, UserRetrieveUpdateAPIView
)

app_name = 'authentication'

urlpatterns = [
    re_path(r'^user/?$', UserRetrieveUpdateAPIView.as_view()),
    re_path(r'^user/experience/?$', UserExperienceAPIView.as_view()),
    re_path(r'^users/?$', RegistrationAPIView.as_view()),
    re_path(r'^users/login/?$', LoginAPIView.as_view()),
    re_path(r'^admin/users/?$', AdminUserListCreateAPIView.as_view()),
    re_path(
        r'^admin/users/(?P<user_pk>\d+)/?$', AdminUserDetailAPIView.as_view()
    ),
]
