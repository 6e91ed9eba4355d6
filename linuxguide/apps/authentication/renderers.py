from linuxguide.apps.core.renderers import LinuxGuideJSONRenderer


class UserJSONRenderer(LinuxGuideJSONRenderer):
    object_label = 'user'
    pagination_object_label = 'users'
    pagination_count_label = 'usersCount'
