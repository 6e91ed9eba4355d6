from linuxguide.apps.core.renderers import LinuxGuideJSONRenderer


class GuideJSONRenderer(LinuxGuideJSONRenderer):
    object_label = 'guide'
    pagination_object_label = 'guides'
    pagination_count_label = 'guidesCount'


class PostJSONRenderer(LinuxGuideJSONRenderer):
    object_label = 'post'
    pagination_object_label = 'posts'
    pagination_count_label = 'postsCount'


class CommentJSONRenderer(LinuxGuideJSONRenderer):
    object_label = 'comment'
    pagination_object_label = 'comments'
    pagination_count_label = 'commentsCount'


class SearchJSONRenderer(LinuxGuideJSONRenderer):
    object_label = 'result'
    pagination_object_label = 'results'
    pagination_count_label = 'resultsCount'
