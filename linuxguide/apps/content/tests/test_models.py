from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import SimpleTestCase, TestCase

from linuxguide.apps.authentication.models import Role, User
from linuxguide.apps.content.models import (
    GUIDE, POST, Comment, Guide, ParentRef, Post
)


class ParentRefTest(SimpleTestCase):

    def test_guide_id_alone(self):
        self.assertEqual(ParentRef.from_ids(guide_id=4), ParentRef(GUIDE, 4))

    def test_post_id_alone(self):
        self.assertEqual(ParentRef.from_ids(post_id=4), ParentRef(POST, 4))

    def test_both_ids_rejected(self):
        with self.assertRaises(ValueError):
            ParentRef.from_ids(guide_id=1, post_id=2)

    def test_no_ids_rejected(self):
        with self.assertRaises(ValueError):
            ParentRef.from_ids()

    def test_other_kind(self):
        self.assertEqual(ParentRef(GUIDE, 1).other_kind, POST)
        self.assertEqual(ParentRef(POST, 1).other_kind, GUIDE)


class CommentParentTest(TestCase):
    """A comment belongs to exactly one of a guide or a post."""

    def setUp(self):
        self.owner = User.objects.create_user(
            username='commenter', password='testpass123'
        )
        self.guide = Guide.objects.create(
            title='Permissions', description='chmod and friends',
            owner=self.owner,
        )
        self.post = Post.objects.create(
            title='My first distro', content='It was Slackware.',
            owner=self.owner,
        )

    def test_comment_on_guide(self):
        comment = Comment.objects.create(
            content='Helpful', owner=self.owner, guide=self.guide
        )
        self.assertEqual(comment.parent_ref, ParentRef(GUIDE, self.guide.pk))

    def test_comment_on_post(self):
        comment = Comment.objects.create(
            content='Same here', owner=self.owner, post=self.post
        )
        self.assertEqual(comment.parent_ref, ParentRef(POST, self.post.pk))

    def test_save_rejects_both_parents(self):
        with self.assertRaises(ValidationError):
            Comment.objects.create(
                content='Greedy', owner=self.owner,
                guide=self.guide, post=self.post,
            )
        self.assertEqual(Comment.objects.count(), 0)

    def test_save_rejects_no_parent(self):
        with self.assertRaises(ValidationError):
            Comment.objects.create(content='Orphan', owner=self.owner)

    def test_database_rejects_both_parents(self):
        # bulk_create skips save(), leaving the check constraint as the
        # last line.
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Comment.objects.bulk_create([Comment(
                    content='Greedy', owner=self.owner,
                    guide=self.guide, post=self.post,
                )])

    def test_database_rejects_no_parent(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                Comment.objects.bulk_create([
                    Comment(content='Orphan', owner=self.owner)
                ])

    def test_clean_rejects_blank_content(self):
        comment = Comment(content='   ', owner=self.owner, guide=self.guide)
        with self.assertRaises(ValidationError):
            comment.clean()

    def test_deleting_parent_deletes_comments(self):
        Comment.objects.create(content='Bye', owner=self.owner, post=self.post)
        self.post.delete()
        self.assertEqual(Comment.objects.count(), 0)


class CommentForParentTest(TestCase):

    def setUp(self):
        self.owner = User.objects.create_user(
            username='commenter', password='testpass123'
        )
        # Same id on purpose: guides and posts share one id space.
        self.guide = Guide.objects.create(
            pk=77, title='Cron', description='Scheduling', owner=self.owner
        )
        self.post = Post.objects.create(
            pk=77, title='Cron broke', content='Help', owner=self.owner
        )

    def test_comments_do_not_leak_between_kinds(self):
        on_guide = Comment.objects.create(
            content='On guide', owner=self.owner, guide=self.guide
        )
        on_post = Comment.objects.create(
            content='On post', owner=self.owner, post=self.post
        )

        self.assertEqual(
            list(Comment.objects.for_parent(ParentRef(GUIDE, 77))), [on_guide]
        )
        self.assertEqual(
            list(Comment.objects.for_parent(ParentRef(POST, 77))), [on_post]
        )

    def test_comments_are_oldest_first(self):
        first = Comment.objects.create(
            content='first', owner=self.owner, guide=self.guide
        )
        second = Comment.objects.create(
            content='second', owner=self.owner, guide=self.guide
        )
        third = Comment.objects.create(
            content='third', owner=self.owner, guide=self.guide
        )

        self.assertEqual(
            list(Comment.objects.for_parent(ParentRef(GUIDE, 77))),
            [first, second, third]
        )


class VisibilityTest(TestCase):

    def setUp(self):
        self.author = User.objects.create_user(
            username='author', password='testpass123'
        )
        self.reader = User.objects.create_user(
            username='reader', password='testpass123'
        )
        self.admin = User.objects.create_user(
            username='moderator', password='testpass123', role=Role.ADMIN
        )
        self.draft = Post.objects.create(
            title='Draft', content='wip', owner=self.author
        )
        self.published = Post.objects.create(
            title='Published', content='done', owner=self.author,
            status=Post.Status.PUBLISHED,
        )

    def test_anonymous_sees_published_only(self):
        self.assertEqual(
            list(Post.objects.visible_to(AnonymousUser())), [self.published]
        )

    def test_owner_sees_own_drafts(self):
        self.assertEqual(
            set(Post.objects.visible_to(self.author)),
            {self.draft, self.published}
        )

    def test_other_user_sees_published_only(self):
        self.assertEqual(
            list(Post.objects.visible_to(self.reader)), [self.published]
        )

    def test_admin_sees_everything(self):
        self.assertEqual(Post.objects.visible_to(self.admin).count(), 2)
