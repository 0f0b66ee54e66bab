"""
Authorization policy shared by every mutating endpoint.

Each rule is a pure decision ``rule(user, obj) -> bool`` over the caller
(``pk`` and global ``role``) and the ownership fields of the resource:

    resource    action           allowed
    ---------   --------------   -----------------------------------------
    task        update/complete  creator, assignee, or admin
    task        delete           creator or admin
    team        view             any member, or admin
    team        update/members   member with role owner/admin, or admin
    team        delete           team owner, or admin
    comment     update/delete    author or admin
    attachment  delete           uploader or admin

Anything not listed is denied.
"""

ROLE_ADMIN = 'admin'

TEAM_MANAGER_ROLES = ('owner', 'admin')


def is_admin(user):
    return getattr(user, 'role', None) == ROLE_ADMIN


def _is(user, user_id):
    return user_id is not None and getattr(user, 'pk', None) == user_id


def can_update_task(user, task):
    return is_admin(user) or _is(user, task.created_by_id) or _is(user, task.assigned_to_id)


def can_delete_task(user, task):
    return is_admin(user) or _is(user, task.created_by_id)


def can_view_team(user, team):
    return is_admin(user) or team.role_of(user) is not None


def can_manage_team(user, team):
    return is_admin(user) or team.role_of(user) in TEAM_MANAGER_ROLES


def can_delete_team(user, team):
    return is_admin(user) or _is(user, team.owner_id)


def can_modify_comment(user, comment):
    return is_admin(user) or _is(user, comment.author_id)


def can_delete_attachment(user, attachment):
    return is_admin(user) or _is(user, attachment.uploaded_by_id)


POLICY = {
    'task': {
        'update': can_update_task,
        'complete': can_update_task,
        'delete': can_delete_task,
    },
    'team': {
        'view': can_view_team,
        'update': can_manage_team,
        'manage_members': can_manage_team,
        'delete': can_delete_team,
    },
    'comment': {
        'update': can_modify_comment,
        'delete': can_modify_comment,
    },
    'attachment': {
        'delete': can_delete_attachment,
    },
}


def is_allowed(resource, action, user, obj):
    rule = POLICY.get(resource, {}).get(action)
    if rule is None or user is None:
        return False
    return bool(rule(user, obj))
