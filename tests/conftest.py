# tests/conftest.py

import itertools

import pytest
from rest_framework.test import APIClient

from tracker.jwt_auth import issue_token
from user.models import User

_counter = itertools.count(1)


@pytest.fixture(autouse=True)
def _test_settings(settings, tmp_path):
    """
    Fast password hashing and a throwaway MEDIA_ROOT per test so uploaded
    blobs never leak between tests.
    """
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    return settings


@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def make_user(db):
    def _make(name=None, email=None, password='secret123', role='user'):
        n = next(_counter)
        return User.objects.create_user(
            email=email or f"user{n}@example.com",
            name=name or f"User {n}",
            password=password,
            role=role,
        )
    return _make


@pytest.fixture()
def client_for():
    """APIClient authenticated as the given user with a bearer token."""
    def _client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client
    return _client


@pytest.fixture()
def make_task(make_user):
    from task.models import Task

    def _make(created_by=None, **fields):
        fields.setdefault('title', 'Write report')
        return Task.objects.create(created_by=created_by or make_user(), **fields)
    return _make
