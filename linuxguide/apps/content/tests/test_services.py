from unittest.mock import patch

from django.contrib.auth.models import AnonymousUser
from django.test import SimpleTestCase, TestCase

from rest_framework.exceptions import NotFound

from linuxguide.apps.authentication.models import User
from linuxguide.apps.content.models import (
    GUIDE, POST, Guide, ParentRef, Post, Tag
)
from linuxguide.apps.content.services import (
    create_comment, get_or_create_tag, get_parent, normalize_tag_names,
    set_post_tags
)


class NormalizeTagNamesTest(SimpleTestCase):

    def test_case_and_whitespace_collapse_to_one_name(self):
        self.assertEqual(
            normalize_tag_names(['Linux', 'linux', ' LINUX ']), ['linux']
        )

    def test_blank_names_are_dropped(self):
        self.assertEqual(normalize_tag_names(['', '  ', 'bash']), ['bash'])

    def test_first_appearance_order_is_kept(self):
        self.assertEqual(
            normalize_tag_names(['zsh', 'Bash', 'ZSH']), ['zsh', 'bash']
        )


class TagServiceTest(TestCase):

    def setUp(self):
        self.owner = User.objects.create_user(
            username='tagger', password='testpass123'
        )
        self.post = Post.objects.create(
            title='Shells', content='Which one?', owner=self.owner
        )

    def test_variants_make_one_tag_and_one_association(self):
        set_post_tags(self.post, ['Linux', 'linux', ' LINUX '])

        self.assertEqual(Tag.objects.count(), 1)
        self.assertEqual(
            list(self.post.tags.values_list('name', flat=True)), ['linux']
        )

    def test_resubmitting_same_tags_changes_nothing(self):
        set_post_tags(self.post, ['bash', 'zsh'])
        set_post_tags(self.post, ['zsh', 'bash'])

        self.assertEqual(Tag.objects.count(), 2)
        self.assertEqual(self.post.tags.count(), 2)

    def test_tags_are_replaced_not_merged(self):
        set_post_tags(self.post, ['bash', 'zsh'])
        set_post_tags(self.post, ['fish'])

        self.assertEqual(
            list(self.post.tags.values_list('name', flat=True)), ['fish']
        )

    def test_unreferenced_tags_are_kept(self):
        set_post_tags(self.post, ['bash'])
        set_post_tags(self.post, ['fish'])

        self.assertTrue(Tag.objects.filter(name='bash').exists())

    def test_existing_tag_is_reused_across_posts(self):
        other = Post.objects.create(
            title='Prompts', content='PS1', owner=self.owner
        )
        set_post_tags(self.post, ['bash'])
        set_post_tags(other, ['Bash'])

        self.assertEqual(Tag.objects.count(), 1)
        self.assertEqual(Tag.objects.get().posts.count(), 2)

    def test_lost_creation_race_reads_the_winner(self):
        winner = Tag.objects.create(name='vim')
        real_get = Tag.objects.get

        # The first lookup misses as if the other request had not committed
        # yet; creating then collides with the row it did commit.
        with patch.object(
            Tag.objects, 'get',
            side_effect=[Tag.DoesNotExist(), real_get(name='vim')]
        ):
            tag = get_or_create_tag('vim')

        self.assertEqual(tag, winner)
        self.assertEqual(Tag.objects.count(), 1)


class CommentServiceTest(TestCase):

    def setUp(self):
        self.owner = User.objects.create_user(
            username='commenter', password='testpass123'
        )
        self.guide = Guide.objects.create(
            title='SSH keys', description='ssh-keygen', owner=self.owner
        )

    def test_get_parent_returns_record(self):
        self.assertEqual(
            get_parent(ParentRef(GUIDE, self.guide.pk), self.owner), self.guide
        )

    def test_get_parent_missing_raises_not_found(self):
        with self.assertRaises(NotFound) as ctx:
            get_parent(ParentRef(POST, 424242), self.owner)
        self.assertIn('post', ctx.exception.detail)

    def test_get_parent_hides_drafts_of_others(self):
        stranger = User.objects.create_user(
            username='stranger', password='testpass123'
        )
        with self.assertRaises(NotFound):
            get_parent(ParentRef(GUIDE, self.guide.pk), stranger)
        with self.assertRaises(NotFound):
            get_parent(ParentRef(GUIDE, self.guide.pk), AnonymousUser())

    def test_create_comment_on_hidden_parent_stores_nothing(self):
        stranger = User.objects.create_user(
            username='stranger', password='testpass123'
        )
        with self.assertRaises(NotFound):
            create_comment(stranger, 'Peek', ParentRef(GUIDE, self.guide.pk))
        self.assertFalse(stranger.comments.exists())

    def test_create_comment_attaches_to_parent(self):
        comment = create_comment(
            self.owner, 'Works great', ParentRef(GUIDE, self.guide.pk)
        )
        self.assertEqual(comment.guide, self.guide)
        self.assertIsNone(comment.post_id)
        self.assertEqual(comment.owner, self.owner)

    def test_create_comment_on_missing_parent_stores_nothing(self):
        with self.assertRaises(NotFound):
            create_comment(self.owner, 'Hello?', ParentRef(GUIDE, 424242))
        self.assertFalse(self.owner.comments.exists())
