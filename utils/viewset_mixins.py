from django.http import Http404
from rest_framework.exceptions import NotFound


class NotFoundMessageMixin:
    """Report a missing object with a resource-specific 404 message."""
    not_found_message = 'Not found'

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise NotFound(self.not_found_message)
