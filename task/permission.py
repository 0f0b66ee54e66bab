from rest_framework.permissions import BasePermission

from utils.access_policy import is_allowed


class TaskAccessPermission(BasePermission):
    """
    Object permission for tasks. Reads are open to any authenticated user;
    writes go through the shared access policy.

    - update / complete: creator, assignee, or a global admin
    - destroy: creator or a global admin (the assignee may not delete)
    """

    ACTIONS = {
        'update': ('update', 'Not authorized to update this task'),
        'partial_update': ('update', 'Not authorized to update this task'),
        'complete': ('complete', 'Not authorized to complete this task'),
        'destroy': ('delete', 'Not authorized to delete this task'),
    }

    def has_object_permission(self, request, view, obj):
        policy_action, message = self.ACTIONS.get(view.action, (None, None))
        if policy_action is None:
            return True

        allowed = is_allowed('task', policy_action, request.user, obj)
        if not allowed:
            self.message = message
        return allowed
