# tests/test_tasks.py

import math

import pytest

from task.models import Task

pytestmark = pytest.mark.django_db

TASKS_URL = '/api/tasks/'


def task_url(task, suffix=''):
    return f"{TASKS_URL}{task.pk}/{suffix}"


@pytest.fixture()
def creator(make_user):
    return make_user(name='Creator')


@pytest.fixture()
def assignee(make_user):
    return make_user(name='Assignee')


@pytest.fixture()
def task(make_task, creator, assignee):
    return make_task(created_by=creator, assigned_to=assignee, title='Fix login bug', description='Users cannot sign in')


def test_create_task_defaults(creator, assignee, client_for):
    response = client_for(creator).post(
        TASKS_URL,
        {'title': 'Ship it', 'assigned_to': assignee.pk, 'tags': ['release', 'release', 'q3'], 'status': 'completed'},
        format='json',
    )

    assert response.status_code == 201
    data = response.json()['data']
    assert data['status'] == 'open'
    assert data['priority'] == 'medium'
    assert data['created_by']['id'] == creator.pk
    assert data['assigned_to']['id'] == assignee.pk
    assert data['tags'] == ['release', 'q3']
    assert data['completed_at'] is None


def test_create_task_requires_title(creator, client_for):
    response = client_for(creator).post(TASKS_URL, {'title': '   '}, format='json')

    assert response.status_code == 400
    assert 'Task title is required' in response.json()['message']


def test_create_task_with_missing_references(creator, client_for):
    client = client_for(creator)

    no_user = client.post(TASKS_URL, {'title': 'x', 'assigned_to': 9999}, format='json')
    assert no_user.status_code == 404
    assert no_user.json()['message'] == 'Assigned user not found'

    no_team = client.post(TASKS_URL, {'title': 'x', 'team': 9999}, format='json')
    assert no_team.status_code == 404
    assert no_team.json()['message'] == 'Team not found'

    assert Task.objects.count() == 0


def test_create_requires_authentication(api_client):
    assert api_client.post(TASKS_URL, {'title': 'x'}, format='json').status_code == 401


def test_list_filters(make_task, creator, assignee, client_for):
    make_task(created_by=creator, assigned_to=assignee, status='open', priority='high')
    make_task(created_by=creator, status='in-progress', priority='high')
    make_task(created_by=assignee, status='open', priority='low')
    client = client_for(creator)

    assert client.get(TASKS_URL, {'status': 'open'}).json()['total'] == 2
    assert client.get(TASKS_URL, {'status': 'open', 'priority': 'high'}).json()['total'] == 1
    assert client.get(TASKS_URL, {'created_by': creator.pk}).json()['total'] == 2
    assert client.get(TASKS_URL, {'assigned_to': assignee.pk}).json()['total'] == 1

    bad = client.get(TASKS_URL, {'status': 'sleeping'})
    assert bad.status_code == 400
    assert bad.json()['success'] is False


def test_list_search_is_case_insensitive_over_title_and_description(make_task, creator, client_for):
    make_task(created_by=creator, title='Deploy pipeline', description='')
    make_task(created_by=creator, title='Write docs', description='explain the DEPLOY steps')
    make_task(created_by=creator, title='Unrelated', description='nothing here')

    response = client_for(creator).get(TASKS_URL, {'search': 'deploy'})

    assert response.json()['total'] == 2


def test_list_search_matches_any_word(make_task, creator, client_for):
    make_task(created_by=creator, title='Deploy pipeline', description='')
    make_task(created_by=creator, title='Write docs', description='release notes')
    make_task(created_by=creator, title='Unrelated', description='nothing here')

    response = client_for(creator).get(TASKS_URL, {'search': 'deploy release'})

    assert response.json()['total'] == 2
    assert {task['title'] for task in response.json()['data']} == {'Deploy pipeline', 'Write docs'}


def test_list_search_matches_whole_words_only(make_task, creator, client_for):
    make_task(created_by=creator, title='Restart server', description='')
    make_task(created_by=creator, title='Draw art', description='')

    client = client_for(creator)

    assert client.get(TASKS_URL, {'search': 'art'}).json()['total'] == 1
    assert client.get(TASKS_URL, {'search': 'serv'}).json()['total'] == 0
    assert client.get(TASKS_URL, {'search': '   '}).json()['total'] == 2


def test_list_sorting(make_task, creator, client_for):
    make_task(created_by=creator, title='b')
    make_task(created_by=creator, title='a')
    make_task(created_by=creator, title='c')
    client = client_for(creator)

    ascending = client.get(TASKS_URL, {'sort_by': 'title', 'order': 'asc'}).json()['data']
    assert [t['title'] for t in ascending] == ['a', 'b', 'c']

    descending = client.get(TASKS_URL, {'sort_by': 'title'}).json()['data']
    assert [t['title'] for t in descending] == ['c', 'b', 'a']

    # default is newest first; unknown fields fall back to it
    newest_first = client.get(TASKS_URL, {'sort_by': 'nonsense'}).json()['data']
    assert [t['title'] for t in newest_first] == ['c', 'a', 'b']


@pytest.mark.parametrize('total, limit', [(0, 10), (7, 3), (9, 3), (12, 5), (4, 10)])
def test_pagination_bounds(total, limit, make_task, creator, client_for):
    for i in range(total):
        make_task(created_by=creator, title=f"task {i}")
    client = client_for(creator)

    pages = math.ceil(total / limit)
    seen = 0
    for page in range(1, pages + 2):
        body = client.get(TASKS_URL, {'page': page, 'limit': limit}).json()
        assert body['total'] == total
        assert body['pages'] == pages
        assert body['page'] == page
        assert body['count'] == len(body['data']) <= limit
        seen += body['count']

    assert seen == total


@pytest.mark.parametrize('page, limit', [(0, 0), (-3, -1), ('abc', 'xyz')])
def test_pagination_coerces_bad_values(page, limit, make_task, creator, client_for):
    make_task(created_by=creator)
    make_task(created_by=creator)

    response = client_for(creator).get(TASKS_URL, {'page': page, 'limit': limit})

    assert response.status_code == 200
    body = response.json()
    assert body['page'] == 1
    if limit in (0, -1):
        assert body['count'] == 1
        assert body['pages'] == 2


def test_my_tasks(make_task, creator, assignee, client_for):
    make_task(created_by=creator, assigned_to=assignee, status='open')
    make_task(created_by=creator, assigned_to=assignee, status='completed')
    make_task(created_by=creator, assigned_to=creator)

    client = client_for(assignee)
    assert client.get(f"{TASKS_URL}my-tasks/").json()['total'] == 2
    assert client.get(f"{TASKS_URL}my-tasks/", {'status': 'open'}).json()['total'] == 1


def test_get_task_includes_comments_and_attachments(task, creator, client_for):
    client = client_for(creator)
    client.post(f"{task_url(task)}comments/", {'content': 'Looking into it'}, format='json')

    response = client.get(task_url(task))

    assert response.status_code == 200
    data = response.json()['data']
    assert data['title'] == 'Fix login bug'
    assert data['comments'][0]['content'] == 'Looking into it'
    assert data['comments'][0]['author']['id'] == creator.pk
    assert data['attachments'] == []


def test_get_missing_task(creator, client_for):
    response = client_for(creator).get(f"{TASKS_URL}424242/")

    assert response.status_code == 404
    assert response.json() == {'success': False, 'message': 'Task not found'}


def test_update_by_creator_and_assignee(task, creator, assignee, client_for):
    by_creator = client_for(creator).put(task_url(task), {'priority': 'urgent'}, format='json')
    assert by_creator.status_code == 200
    assert by_creator.json()['data']['priority'] == 'urgent'
    assert by_creator.json()['data']['title'] == 'Fix login bug'

    by_assignee = client_for(assignee).patch(task_url(task), {'status': 'in-progress'}, format='json')
    assert by_assignee.status_code == 200
    assert by_assignee.json()['data']['status'] == 'in-progress'


def test_update_and_delete_forbidden_for_unrelated_user(task, make_user, client_for):
    stranger = client_for(make_user())

    update = stranger.put(task_url(task), {'title': 'mine now'}, format='json')
    delete = stranger.delete(task_url(task))

    assert update.status_code == 403
    assert update.json() == {'success': False, 'message': 'Not authorized to update this task'}
    assert delete.status_code == 403
    assert Task.objects.get(pk=task.pk).title == 'Fix login bug'


def test_update_rejects_protected_fields(task, creator, assignee, client_for):
    response = client_for(creator).put(task_url(task), {'created_by': assignee.pk, 'title': 'x'}, format='json')

    assert response.status_code == 400
    assert 'created_by' in response.json()['message']
    task.refresh_from_db()
    assert task.created_by == creator
    assert task.title == 'Fix login bug'


def test_update_to_completed_stamps_completed_at_once(task, creator, client_for):
    client = client_for(creator)

    first = client.put(task_url(task), {'status': 'completed'}, format='json').json()['data']['completed_at']
    assert first is not None

    client.put(task_url(task), {'status': 'open'}, format='json')
    again = client.put(task_url(task), {'status': 'completed'}, format='json').json()['data']['completed_at']
    assert again == first


def test_complete_is_idempotent(task, assignee, client_for):
    client = client_for(assignee)

    first = client.put(task_url(task, 'complete/'))
    assert first.status_code == 200
    completed_at = first.json()['data']['completed_at']
    assert completed_at is not None
    assert first.json()['data']['status'] == 'completed'

    second = client.put(task_url(task, 'complete/'))
    assert second.status_code == 200
    assert second.json()['data']['completed_at'] == completed_at


def test_complete_forbidden_for_unrelated_user(task, make_user, client_for):
    response = client_for(make_user()).put(task_url(task, 'complete/'))

    assert response.status_code == 403
    assert Task.objects.get(pk=task.pk).completed_at is None


def test_delete_rules(task, creator, assignee, make_user, make_task, client_for):
    assert client_for(assignee).delete(task_url(task)).status_code == 403

    response = client_for(creator).delete(task_url(task))
    assert response.status_code == 200
    assert response.json() == {'success': True, 'message': 'Task deleted successfully'}
    assert not Task.objects.filter(pk=task.pk).exists()

    other = make_task(created_by=creator)
    admin = make_user(role='admin')
    assert client_for(admin).delete(task_url(other)).status_code == 200
