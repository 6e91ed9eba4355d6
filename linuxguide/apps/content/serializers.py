from django.db import transaction

from rest_framework import serializers

from linuxguide.apps.authentication.serializers import OwnerSerializer

from .models import Comment, Guide, ParentRef, Post, Tag
from .relations import TagListField
from .services import create_comment, set_post_tags


class TimestampsMixin(serializers.Serializer):
    createdAt = serializers.SerializerMethodField(method_name='get_created_at')
    updatedAt = serializers.SerializerMethodField(method_name='get_updated_at')

    def get_created_at(self, instance):
        return instance.created_at.isoformat()

    def get_updated_at(self, instance):
        return instance.updated_at.isoformat()


class GuideSerializer(TimestampsMixin, serializers.ModelSerializer):
    owner = OwnerSerializer(read_only=True)

    class Meta:
        model = Guide
        fields = (
            'id',
            'title',
            'description',
            'status',
            'level',
            'owner',
            'createdAt',
            'updatedAt',
        )

    def create(self, validated_data):
        owner = self.context.get('owner', None)

        return Guide.objects.create(owner=owner, **validated_data)


class PostSerializer(TimestampsMixin, serializers.ModelSerializer):
    owner = OwnerSerializer(read_only=True)
    tags = TagListField()

    class Meta:
        model = Post
        fields = (
            'id',
            'title',
            'content',
            'status',
            'tags',
            'owner',
            'createdAt',
            'updatedAt',
        )

    @transaction.atomic
    def create(self, validated_data):
        owner = self.context.get('owner', None)
        tag_names = validated_data.pop('tags')

        post = Post.objects.create(owner=owner, **validated_data)
        set_post_tags(post, tag_names)

        return post

    @transaction.atomic
    def update(self, instance, validated_data):
        tag_names = validated_data.pop('tags', None)

        for (key, value) in validated_data.items():
            setattr(instance, key, value)

        instance.save()

        # Tags are replaced as a whole set, never merged.
        if tag_names is not None:
            set_post_tags(instance, tag_names)

        return instance


class CommentSerializer(TimestampsMixin, serializers.ModelSerializer):
    owner = OwnerSerializer(read_only=True)

    # Blank or whitespace-only content fails here, before anything else.
    content = serializers.CharField()

    guideId = serializers.IntegerField(
        source='guide_id', min_value=1, required=False, allow_null=True
    )
    postId = serializers.IntegerField(
        source='post_id', min_value=1, required=False, allow_null=True
    )

    class Meta:
        model = Comment
        fields = (
            'id',
            'owner',
            'content',
            'guideId',
            'postId',
            'createdAt',
            'updatedAt',
        )

    def validate(self, data):
        try:
            data['parent'] = ParentRef.from_ids(
                guide_id=data.pop('guide_id', None),
                post_id=data.pop('post_id', None),
            )
        except ValueError as e:
            raise serializers.ValidationError(str(e))

        return data

    def create(self, validated_data):
        return create_comment(
            self.context['owner'],
            validated_data['content'],
            validated_data['parent'],
        )


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ('name',)

    def to_representation(self, obj):
        return obj.name
