from rest_framework.permissions import BasePermission

from utils.access_policy import is_allowed


class TeamAccessPermission(BasePermission):
    """
    Object permission for teams, delegating to the shared access policy.

    - retrieve: any member, or a global admin
    - update / add_member / remove_member: member with role owner/admin, or a global admin
    - destroy: the team owner, or a global admin
    """

    ACTIONS = {
        'retrieve': ('view', 'Not authorized to access this team'),
        'update': ('update', 'Not authorized to update this team'),
        'partial_update': ('update', 'Not authorized to update this team'),
        'add_member': ('manage_members', 'Not authorized to add members to this team'),
        'remove_member': ('manage_members', 'Not authorized to remove members from this team'),
        'destroy': ('delete', 'Not authorized to delete this team'),
    }

    def has_object_permission(self, request, view, obj):
        policy_action, message = self.ACTIONS.get(view.action, (None, None))
        if policy_action is None:
            return True

        allowed = is_allowed('team', policy_action, request.user, obj)
        if not allowed:
            self.message = message
        return allowed
