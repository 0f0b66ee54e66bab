from rest_framework.permissions import BasePermission

from utils.access_policy import is_allowed


class CommentAccessPermission(BasePermission):
    """Only the author or a global admin may edit or delete a comment."""

    ACTIONS = {
        'update': ('update', 'Not authorized to update this comment'),
        'partial_update': ('update', 'Not authorized to update this comment'),
        'destroy': ('delete', 'Not authorized to delete this comment'),
    }

    def has_object_permission(self, request, view, obj):
        policy_action, message = self.ACTIONS.get(view.action, (None, None))
        if policy_action is None:
            return True

        allowed = is_allowed('comment', policy_action, request.user, obj)
        if not allowed:
            self.message = message
        return allowed
