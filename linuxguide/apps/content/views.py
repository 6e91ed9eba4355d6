import logging

from django.db import transaction
from django.db.models import Q

from rest_framework import generics, serializers, status, viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import (
    AllowAny, IsAuthenticated, IsAuthenticatedOrReadOnly
)
from rest_framework.response import Response
from rest_framework.views import APIView

from linuxguide.apps.authentication.permissions import (
    ADMIN_ROLES, HasRequiredRole, IsOwnerOrSuperAdmin
)

from .models import Comment, Guide, ParentRef, Post, Tag
from .renderers import (
    CommentJSONRenderer, GuideJSONRenderer, PostJSONRenderer,
    SearchJSONRenderer
)
from .serializers import (
    CommentSerializer, GuideSerializer, PostSerializer, TagSerializer
)
from .services import get_parent

logger = logging.getLogger(__name__)


def get_record_by_pk(queryset, pk):
    """
    Centralized lookup for every detail endpoint. Raises NotFound instead of
    letting DoesNotExist escape.
    """
    try:
        return queryset.get(pk=pk)
    except queryset.model.DoesNotExist:
        raise NotFound('A {} with this ID does not exist.'.format(
            queryset.model._meta.verbose_name
        ))


class ContentViewSet(viewsets.GenericViewSet):
    """
    Shared list/create/retrieve/update/destroy for owned content. Subclasses
    set the queryset, serializer, renderer, the key the payload is wrapped in
    and the per-method role gates.
    """
    lookup_value_regex = r'\d+'
    permission_classes = (
        IsAuthenticatedOrReadOnly, HasRequiredRole, IsOwnerOrSuperAdmin
    )
    payload_key = None
    required_roles = {}

    def get_queryset(self):
        return self.queryset.visible_to(self.request.user)

    def create(self, request):
        serializer_context = {
            'owner': request.user,
            'request': request
        }
        serializer_data = request.data.get(self.payload_key, {})

        serializer = self.serializer_class(
            data=serializer_data, context=serializer_context
        )
        serializer.is_valid(raise_exception=True)
        record = serializer.save()

        logger.info(
            'User %s created %s %s', request.user.pk, self.payload_key,
            record.pk,
        )

        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def list(self, request):
        serializer_context = {'request': request}
        page = self.paginate_queryset(self.filter_queryset(self.get_queryset()))

        serializer = self.serializer_class(
            page,
            context=serializer_context,
            many=True
        )

        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):
        serializer_context = {'request': request}
        serializer_instance = get_record_by_pk(self.get_queryset(), pk)

        serializer = self.serializer_class(
            serializer_instance,
            context=serializer_context
        )

        return Response(serializer.data, status=status.HTTP_200_OK)

    def update(self, request, pk=None):
        serializer_context = {'request': request}
        serializer_data = request.data.get(self.payload_key, {})

        # The row stays locked from the ownership check until the write
        # commits, so the owner cannot change in between.
        with transaction.atomic():
            serializer_instance = get_record_by_pk(
                self.queryset.select_for_update(), pk
            )
            self.check_object_permissions(request, serializer_instance)

            serializer = self.serializer_class(
                serializer_instance,
                context=serializer_context,
                data=serializer_data,
                partial=True
            )
            serializer.is_valid(raise_exception=True)
            serializer.save()

        logger.info(
            'User %s updated %s %s', request.user.pk, self.payload_key, pk
        )

        return Response(serializer.data, status=status.HTTP_200_OK)

    def partial_update(self, request, pk=None):
        return self.update(request, pk)

    def destroy(self, request, pk=None):
        with transaction.atomic():
            instance = get_record_by_pk(self.queryset.select_for_update(), pk)
            self.check_object_permissions(request, instance)
            instance.delete()

        logger.info(
            'User %s deleted %s %s', request.user.pk, self.payload_key, pk
        )

        return Response(None, status=status.HTTP_204_NO_CONTENT)


class GuideViewSet(ContentViewSet):
    queryset = Guide.objects.select_related('owner')
    renderer_classes = (GuideJSONRenderer,)
    serializer_class = GuideSerializer
    payload_key = 'guide'
    required_roles = {
        'POST': ADMIN_ROLES,
        'PUT': ADMIN_ROLES,
        'PATCH': ADMIN_ROLES,
        'DELETE': ADMIN_ROLES,
    }

    def filter_queryset(self, queryset):
        owner = self.request.query_params.get('owner', None)
        if owner is not None:
            queryset = queryset.filter(owner__username=owner)

        level = self.request.query_params.get('level', None)
        if level is not None:
            queryset = queryset.filter(level=level)

        return queryset


class PostViewSet(ContentViewSet):
    queryset = Post.objects.select_related('owner').prefetch_related('tags')
    renderer_classes = (PostJSONRenderer,)
    serializer_class = PostSerializer
    payload_key = 'post'
    required_roles = {
        'DELETE': ADMIN_ROLES,
    }

    def filter_queryset(self, queryset):
        owner = self.request.query_params.get('owner', None)
        if owner is not None:
            queryset = queryset.filter(owner__username=owner)

        tag = self.request.query_params.get('tag', None)
        if tag is not None:
            queryset = queryset.filter(tags__name=tag.strip().lower())

        return queryset


class GuidesForYouAPIView(generics.ListAPIView):
    """Published guides pitched at the user's experience level."""
    permission_classes = (IsAuthenticated,)
    queryset = Guide.objects.select_related('owner')
    renderer_classes = (GuideJSONRenderer,)
    serializer_class = GuideSerializer

    def get_queryset(self):
        return self.queryset.filter(
            status=Guide.Status.PUBLISHED,
            level=self.request.user.experience_level,
        )


class ParentLookupSerializer(serializers.Serializer):
    guideId = serializers.IntegerField(
        min_value=1, required=False, allow_null=True
    )
    postId = serializers.IntegerField(
        min_value=1, required=False, allow_null=True
    )

    def validate(self, data):
        try:
            parent = ParentRef.from_ids(
                guide_id=data.get('guideId', None),
                post_id=data.get('postId', None),
            )
        except ValueError as e:
            raise serializers.ValidationError(str(e))

        return {'parent': parent}


class CommentsListCreateAPIView(generics.ListCreateAPIView):
    """
    Comments addressed by an explicit `guideId` or `postId`: in the query
    string when listing, in the comment payload when creating.
    """
    permission_classes = (IsAuthenticatedOrReadOnly,)
    queryset = Comment.objects.select_related('owner')
    renderer_classes = (CommentJSONRenderer,)
    serializer_class = CommentSerializer

    def get_parent_ref(self):
        serializer = ParentLookupSerializer(data=self.request.query_params)
        serializer.is_valid(raise_exception=True)

        return serializer.validated_data['parent']

    def get_comment_data(self, request):
        data = request.data.get('comment', {})

        if not isinstance(data, dict):
            raise ValidationError({'comment': 'Expected a comment object.'})

        return dict(data)

    def filter_queryset(self, queryset):
        ref = self.get_parent_ref()

        # Comments of a parent the user cannot see are as hidden as the parent.
        get_parent(ref, self.request.user)

        return queryset.for_parent(ref)

    def create(self, request, *args, **kwargs):
        context = {'owner': request.user, 'request': request}

        serializer = self.serializer_class(
            data=self.get_comment_data(request), context=context
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()

        return Response(serializer.data, status=status.HTTP_201_CREATED)


class ParentCommentsListCreateAPIView(CommentsListCreateAPIView):
    """Comments of the guide or post named in the URL."""
    parent_kind = None

    def get_parent_ref(self):
        return ParentRef(self.parent_kind, int(self.kwargs['parent_pk']))

    def get_comment_data(self, request):
        data = super().get_comment_data(request)
        data['{}Id'.format(self.parent_kind)] = int(self.kwargs['parent_pk'])

        return data


class GuideCommentsListCreateAPIView(ParentCommentsListCreateAPIView):
    parent_kind = 'guide'


class PostCommentsListCreateAPIView(ParentCommentsListCreateAPIView):
    parent_kind = 'post'


class CommentsDestroyAPIView(generics.DestroyAPIView):
    lookup_url_kwarg = 'comment_pk'
    permission_classes = (IsAuthenticated, IsOwnerOrSuperAdmin)
    queryset = Comment.objects.all()

    def destroy(self, request, comment_pk=None):
        with transaction.atomic():
            comment = get_record_by_pk(
                self.queryset.select_for_update(), comment_pk
            )
            self.check_object_permissions(request, comment)
            comment.delete()

        logger.info('User %s deleted comment %s', request.user.pk, comment_pk)

        return Response(None, status=status.HTTP_204_NO_CONTENT)


class TagListAPIView(generics.ListAPIView):
    queryset = Tag.objects.all()
    pagination_class = None
    permission_classes = (AllowAny,)
    serializer_class = TagSerializer

    def list(self, request):
        serializer_data = self.get_queryset()
        serializer = self.serializer_class(serializer_data, many=True)

        return Response({
            'tags': serializer.data
        }, status=status.HTTP_200_OK)


class SearchAPIView(APIView):
    """
    Case-insensitive search over guide titles and descriptions and over post
    titles, bodies and tag names, honouring the same visibility rules as the
    listings.
    """
    permission_classes = (AllowAny,)
    renderer_classes = (SearchJSONRenderer,)

    def get(self, request):
        term = request.query_params.get('search', '').strip()

        if not term:
            raise ValidationError({'search': 'A search term is required.'})

        guides = Guide.objects.visible_to(request.user).filter(
            Q(title__icontains=term) | Q(description__icontains=term)
        ).select_related('owner')

        posts = Post.objects.visible_to(request.user).filter(
            Q(title__icontains=term) |
            Q(content__icontains=term) |
            Q(tags__name__icontains=term.lower())
        ).distinct().select_related('owner').prefetch_related('tags')

        context = {'request': request}
        results = [
            dict(GuideSerializer(guide, context=context).data,
                 type='guide', tags=[])
            for guide in guides
        ]
        results += [
            dict(PostSerializer(post, context=context).data, type='post')
            for post in posts
        ]

        return Response(results, status=status.HTTP_200_OK)
