from linuxguide.apps.core.renderers import LinuxGuideJSONRenderer


class ContactJSONRenderer(LinuxGuideJSONRenderer):
    object_label = 'contact'
    pagination_object_label = 'contacts'
    pagination_count_label = 'contactsCount'
