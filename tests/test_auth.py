# tests/test_auth.py

import warnings

import pytest

from tracker.jwt_auth import issue_token
from user.models import User

pytestmark = pytest.mark.django_db

REGISTER_URL = '/api/auth/register/'
LOGIN_URL = '/api/auth/login/'


def register(client, email='alice@example.com', password='secret123', name='Alice'):
    return client.post(REGISTER_URL, {'name': name, 'email': email, 'password': password}, format='json')


def test_register_returns_token_and_public_profile(api_client):
    response = register(api_client)

    assert response.status_code == 201
    body = response.json()
    assert body['success'] is True
    assert body['data']['token']
    assert body['data']['user'] == {
        'id': body['data']['user']['id'],
        'name': 'Alice',
        'email': 'alice@example.com',
        'role': 'user',
    }
    assert 'password' not in body['data']['user']

    user = User.objects.get(email='alice@example.com')
    assert user.password != 'secret123'
    assert user.check_password('secret123')


def test_register_same_email_twice_is_a_conflict(api_client):
    assert register(api_client).status_code == 201

    response = register(api_client, email='Alice@Example.com')

    assert response.status_code == 400
    assert response.json() == {'success': False, 'message': 'User already exists with this email'}
    assert User.objects.count() == 1


def test_register_validates_fields(api_client):
    response = api_client.post(REGISTER_URL, {'email': 'not-an-email', 'password': '123'}, format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['success'] is False
    assert 'Name is required' in body['message']
    assert 'Password must be at least 6 characters' in body['message']


def test_register_ignores_role_in_payload(api_client):
    api_client.post(
        REGISTER_URL,
        {'name': 'Mallory', 'email': 'm@example.com', 'password': 'secret123', 'role': 'admin'},
        format='json',
    )
    assert User.objects.get(email='m@example.com').role == 'user'


def test_login_success(api_client, make_user):
    make_user(email='bob@example.com', password='hunter22')

    response = api_client.post(LOGIN_URL, {'email': 'bob@example.com', 'password': 'hunter22'}, format='json')

    assert response.status_code == 200
    assert response.json()['data']['user']['email'] == 'bob@example.com'
    assert response.json()['data']['token']


def test_login_failures_are_indistinguishable(api_client, make_user):
    make_user(email='bob@example.com', password='hunter22')

    wrong_password = api_client.post(LOGIN_URL, {'email': 'bob@example.com', 'password': 'nope!!'}, format='json')
    unknown_email = api_client.post(LOGIN_URL, {'email': 'ghost@example.com', 'password': 'hunter22'}, format='json')

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {'success': False, 'message': 'Invalid credentials'}


def test_login_requires_email_and_password(api_client):
    response = api_client.post(LOGIN_URL, {'email': 'bob@example.com'}, format='json')

    assert response.status_code == 400
    assert response.json()['message'] == 'Please provide email and password'


@pytest.mark.parametrize('payload', [
    {'email': ['bob@example.com'], 'password': 'hunter22'},
    {'email': 'bob@example.com', 'password': {'value': 'hunter22'}},
    {'email': None, 'password': 'hunter22'},
    {'email': '   ', 'password': 'hunter22'},
])
def test_login_rejects_malformed_fields(api_client, make_user, payload):
    make_user(email='bob@example.com', password='hunter22')

    response = api_client.post(LOGIN_URL, payload, format='json')

    assert response.status_code == 400
    assert response.json() == {'success': False, 'message': 'Please provide email and password'}


def test_login_normalizes_email(api_client, make_user):
    make_user(email='bob@example.com', password='hunter22')

    response = api_client.post(LOGIN_URL, {'email': '  Bob@Example.COM ', 'password': 'hunter22'}, format='json')

    assert response.status_code == 200


def test_me_requires_a_valid_token(api_client):
    assert api_client.get('/api/auth/me/').status_code == 401

    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
    response = api_client.get('/api/auth/me/')
    assert response.status_code == 401
    assert response.json() == {'success': False, 'message': 'Not authorized to access this route'}


def test_me_lists_teams(make_user, client_for):
    user = make_user(name='Carol')
    client = client_for(user)
    client.post('/api/teams/', {'name': 'Platform', 'description': 'infra'}, format='json')

    response = client.get('/api/auth/me/')

    assert response.status_code == 200
    data = response.json()['data']
    assert data['name'] == 'Carol'
    assert [t['name'] for t in data['teams']] == ['Platform']


def test_update_profile_changes_only_name_and_email(make_user, client_for):
    user = make_user(name='Dan', password='secret123')
    client = client_for(user)

    response = client.put(
        '/api/auth/profile/',
        {'name': 'Daniel', 'email': 'daniel@example.com', 'role': 'admin', 'password': 'changed!'},
        format='json',
    )

    assert response.status_code == 200
    user.refresh_from_db()
    assert user.name == 'Daniel'
    assert user.email == 'daniel@example.com'
    assert user.role == 'user'
    assert user.check_password('secret123')


def test_update_profile_rejects_taken_email(make_user, client_for):
    make_user(email='taken@example.com')
    user = make_user()

    response = client_for(user).put('/api/auth/profile/', {'email': 'taken@example.com'}, format='json')

    assert response.status_code == 400
    assert response.json()['message'] == 'User already exists with this email'


def test_update_password(make_user, client_for, api_client):
    user = make_user(email='erin@example.com', password='oldpass1')
    client = client_for(user)

    bad = client.put('/api/auth/password/', {'current_password': 'wrong!!', 'new_password': 'newpass1'}, format='json')
    assert bad.status_code == 401
    assert bad.json()['message'] == 'Current password is incorrect'

    good = client.put('/api/auth/password/', {'current_password': 'oldpass1', 'new_password': 'newpass1'}, format='json')
    assert good.status_code == 200
    new_token = good.json()['data']['token']

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {new_token}")
    assert api_client.get('/api/auth/me/').status_code == 200

    login = api_client.post(LOGIN_URL, {'email': 'erin@example.com', 'password': 'newpass1'}, format='json')
    assert login.status_code == 200


def test_logout(make_user, client_for):
    response = client_for(make_user()).post('/api/auth/logout/')

    assert response.status_code == 200
    assert response.json() == {'success': True, 'message': 'Logged out successfully'}


def test_default_signing_key_suits_hs256(settings, make_user):
    assert len(settings.SIMPLE_JWT['SIGNING_KEY'].encode()) >= 32

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always')
        issue_token(make_user())

    assert not [w for w in caught if w.category.__name__ == 'InsecureKeyLengthWarning']
