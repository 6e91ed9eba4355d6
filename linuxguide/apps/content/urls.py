from django.urls import include, path, re_path

from rest_framework.routers import DefaultRouter

from .views import (
    CommentsDestroyAPIView, CommentsListCreateAPIView,
    GuideCommentsListCreateAPIView, GuidesForYouAPIView, GuideViewSet,
    PostCommentsListCreateAPIView, PostViewSet, SearchAPIView, TagListAPIView
)

app_name = 'content'

router = DefaultRouter(trailing_slash=False)
router.register(r'guides', GuideViewSet)
router.register(r'posts', PostViewSet)

urlpatterns = [
    re_path(r'^guides/for-you/?$', GuidesForYouAPIView.as_view()),

    re_path(
        r'^guides/(?P<parent_pk>\d+)/comments/?$',
        GuideCommentsListCreateAPIView.as_view()
    ),

    re_path(
        r'^posts/(?P<parent_pk>\d+)/comments/?$',
        PostCommentsListCreateAPIView.as_view()
    ),

    re_path(r'^comments/?$', CommentsListCreateAPIView.as_view()),

    re_path(
        r'^comments/(?P<comment_pk>\d+)/?$', CommentsDestroyAPIView.as_view()
    ),

    re_path(r'^tags/?$', TagListAPIView.as_view()),

    re_path(r'^search/?$', SearchAPIView.as_view()),

    path('', include(router.urls)),
]
