from collections import namedtuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from linuxguide.apps.authentication.models import ExperienceLevel
from linuxguide.apps.core.models import TimestampedModel

GUIDE = 'guide'
POST = 'post'


class ParentRef(namedtuple('ParentRef', ('kind', 'pk'))):
    """
    What a comment hangs off: a guide or a post, never both.

    The database stores this as two nullable foreign keys; everywhere else
    the pair travels as a ParentRef so the invalid combinations cannot be
    expressed.
    """
    __slots__ = ()

    @property
    def other_kind(self):
        return POST if self.kind == GUIDE else GUIDE

    @classmethod
    def from_ids(cls, guide_id=None, post_id=None):
        """Raise ValueError unless exactly one of the ids is given."""
        if (guide_id is None) == (post_id is None):
            raise ValueError(
                'A comment must be associated with exactly one of '
                'guideId or postId.'
            )

        if guide_id is not None:
            return cls(GUIDE, guide_id)

        return cls(POST, post_id)


class ContentQuerySet(models.QuerySet):
    def visible_to(self, user):
        """
        Admins see everything. Everyone else sees published records plus,
        when logged in, their own drafts.
        """
        if user is not None and user.is_authenticated:
            if user.is_admin:
                return self

            return self.filter(
                models.Q(status=self.model.Status.PUBLISHED) |
                models.Q(owner=user)
            )

        return self.filter(status=self.model.Status.PUBLISHED)


class Guide(TimestampedModel):
    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PUBLISHED = 'published', 'Published'

    title = models.CharField(db_index=True, max_length=255)
    description = models.TextField()

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.DRAFT
    )

    level = models.CharField(
        max_length=20,
        choices=ExperienceLevel.choices,
        default=ExperienceLevel.BEGINNER,
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='guides'
    )

    objects = ContentQuerySet.as_manager()

    def __str__(self):
        return self.title


class Post(TimestampedModel):
    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        PUBLISHED = 'published', 'Published'
        ARCHIVED = 'archived', 'Archived'

    title = models.CharField(db_index=True, max_length=255, unique=True)
    content = models.TextField()

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.DRAFT
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='posts'
    )

    tags = models.ManyToManyField(
        'Tag',
        related_name='posts'
    )

    objects = ContentQuerySet.as_manager()

    def __str__(self):
        return self.title


class Tag(models.Model):
    # Always stored lowercased and trimmed; see services.normalize_tag_names.
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class CommentQuerySet(models.QuerySet):
    def for_parent(self, ref):
        """
        Comments attached to the parent `ref`, oldest first.

        Guide and post ids share one integer space, so the other foreign key
        must be explicitly null or comments of another parent could leak in.
        """
        return self.filter(**{
            '{}_id'.format(ref.kind): ref.pk,
            '{}__isnull'.format(ref.other_kind): True,
        }).order_by('created_at', 'pk')


class Comment(TimestampedModel):
    content = models.TextField()

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='comments'
    )

    guide = models.ForeignKey(
        'Guide',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='comments'
    )

    post = models.ForeignKey(
        'Post',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='comments'
    )

    objects = CommentQuerySet.as_manager()

    class Meta:
        ordering = ['created_at', 'pk']
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(guide__isnull=False, post__isnull=True) |
                    models.Q(guide__isnull=True, post__isnull=False)
                ),
                name='comment_exactly_one_parent',
            ),
        ]

    def __str__(self):
        return self.content[:50]

    @property
    def parent_ref(self):
        return ParentRef.from_ids(guide_id=self.guide_id, post_id=self.post_id)

    def validate_parent(self):
        try:
            return self.parent_ref
        except ValueError as e:
            raise ValidationError(str(e))

    def clean(self):
        super().clean()
        self.validate_parent()

        if not self.content or not self.content.strip():
            raise ValidationError({'content': 'A comment cannot be empty.'})

    def save(self, *args, **kwargs):
        # The check constraint backs this up for writes that bypass save().
        self.validate_parent()
        super().save(*args, **kwargs)
