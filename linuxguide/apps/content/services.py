import logging

from django.db import IntegrityError, transaction

from rest_framework.exceptions import NotFound

from .models import GUIDE, POST, Comment, Guide, Post, Tag

logger = logging.getLogger(__name__)

PARENT_MODELS = {
    GUIDE: Guide,
    POST: Post,
}


def normalize_tag_names(names):
    """
    Trim and lowercase every name, dropping blanks and repeats while keeping
    the order in which names first appear.
    """
    normalized = []

    for name in names:
        name = name.strip().lower()

        if name and name not in normalized:
            normalized.append(name)

    return normalized


def get_or_create_tag(name):
    """
    Look up the tag called `name`, creating it if needed.

    Two requests may race to create the same new tag. The unique constraint
    on the name decides the winner; the loser re-reads the row it lost to.
    """
    try:
        return Tag.objects.get(name=name)
    except Tag.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            return Tag.objects.create(name=name)
    except IntegrityError:
        logger.debug('Tag %r created concurrently, re-reading it', name)
        return Tag.objects.get(name=name)


def set_post_tags(post, names):
    """Replace the post's tags with exactly the tags called `names`."""
    tags = [get_or_create_tag(name) for name in normalize_tag_names(names)]
    post.tags.set(tags)

    return tags


def get_parent(ref, actor):
    """
    The guide or post `ref` points at, as seen by `actor`. A draft the actor
    may not read is reported exactly like a missing record.
    """
    model = PARENT_MODELS[ref.kind]

    try:
        return model.objects.visible_to(actor).get(pk=ref.pk)
    except model.DoesNotExist:
        raise NotFound({
            ref.kind: 'A {} with this ID does not exist.'.format(ref.kind)
        })


def create_comment(owner, content, ref):
    """
    Attach a new comment by `owner` to the parent `ref`.

    The caller has already validated `content` and the shape of `ref`; the
    only thing left to check is that the parent exists and `owner` can see it.
    """
    parent = get_parent(ref, owner)

    comment = Comment.objects.create(
        owner=owner, content=content, **{ref.kind: parent}
    )

    logger.info(
        'User %s commented on %s %s (comment %s)',
        owner.pk, ref.kind, ref.pk, comment.pk,
    )

    return comment
