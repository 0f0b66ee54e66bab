from rest_framework.permissions import BasePermission

from utils.access_policy import is_allowed


class AttachmentAccessPermission(BasePermission):
    """Attachments are immutable; only the uploader or a global admin may delete one."""

    def has_object_permission(self, request, view, obj):
        if view.action != 'destroy':
            return True

        allowed = is_allowed('attachment', 'delete', request.user, obj)
        if not allowed:
            self.message = 'Not authorized to delete this attachment'
        return allowed
