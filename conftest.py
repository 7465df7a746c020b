"""
Common test fixtures for the Concert Connect API tests.

Provides user fixtures, Django test clients authenticated with a signed
bearer token, and a cached event.
"""
from datetime import timedelta

import pytest
from django.contrib.auth.models import User
from django.test import Client
from django.utils import timezone

from events.models import Event
from users.authentication import issue_token


def make_user(email, password="secret1", first_name="Test", last_name="User"):
    return User.objects.create_user(
        username=email, email=email, password=password, first_name=first_name, last_name=last_name
    )


def client_for(user):
    """A Django test client sending ``Authorization: Bearer <token>`` for ``user``."""
    return Client(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")


@pytest.fixture
def user(db):
    return make_user("alice@example.com", first_name="Alice", last_name="Smith")


@pytest.fixture
def bob(db):
    return make_user("bob@example.com", first_name="Bob", last_name="Jones")


@pytest.fixture
def carol(db):
    return make_user("carol@example.com", first_name="Carol", last_name="White")


@pytest.fixture
def auth_client(user):
    return client_for(user)


@pytest.fixture
def bob_client(bob):
    return client_for(bob)


@pytest.fixture
def carol_client(carol):
    return client_for(carol)


@pytest.fixture
def event(db):
    return Event.objects.create(
        external_id="E1",
        title="Rock Night",
        artist_name="The Band",
        venue_name="The Hall",
        event_date=timezone.now() + timedelta(days=7),
        genre="rock",
    )
