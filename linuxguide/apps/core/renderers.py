from rest_framework.renderers import JSONRenderer


class LinuxGuideJSONRenderer(JSONRenderer):
    """
    Wraps every successful payload in a named envelope, e.g. ``{"guide": {}}``
    for a single object and ``{"guides": [], "guidesCount": 0}`` for a list.
    """
    charset = 'utf-8'
    object_label = 'object'
    pagination_object_label = 'objects'
    pagination_count_label = 'count'

    def render(self, data, media_type=None, renderer_context=None):
        # 204 responses carry no body at all.
        if data is None:
            return b''

        if isinstance(data, list):
            return super(LinuxGuideJSONRenderer, self).render({
                self.pagination_object_label: data,
                self.pagination_count_label: len(data),
            })

        if data.get('results', None) is not None:
            return super(LinuxGuideJSONRenderer, self).render({
                self.pagination_object_label: data['results'],
                self.pagination_count_label: data['count'],
            })

        # If the view throws an error (such as the user can't be authenticated
        # or something similar), `data` will contain an `errors` key. We want
        # the default JSONRenderer to handle rendering errors, so we need to
        # check for this case.
        elif data.get('errors', None) is not None:
            return super(LinuxGuideJSONRenderer, self).render(data)

        return super(LinuxGuideJSONRenderer, self).render({
            self.object_label: data
        })
