"""Pytest configuration and shared fixtures."""

import logging
import os

import pytest

from config import OktaSettings

# Disable logging during tests to reduce noise
logging.disable(logging.CRITICAL)


class FakeOktaClient:
    """
    Stands in for OktaClient. Every call is recorded in ``calls`` as
    (method name, positional args). ``results`` maps a method name to what
    it returns (a list of records for the list_* methods) and ``errors`` maps
    a method name to the exception it raises.
    """

    domain = "test.okta.com"

    def __init__(self):
        self.calls = []
        self.results = {}
        self.errors = {}

    def _record(self, name, *args):
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]
        return self.results.get(name)

    def called(self, name):
        return [args for call_name, args in self.calls if call_name == name]

    async def _iterate(self, name, params):
        records = self._record(name, params) or []
        for record in records:
            yield record

    def list_users(self, params=None):
        return self._iterate("list_users", params)

    def list_groups(self, params=None):
        return self._iterate("list_groups", params)

    def list_applications(self, params=None):
        return self._iterate("list_applications", params)

    async def get_current_user(self):
        return self._record("get_current_user")

    async def create_user(self, body):
        return self._record("create_user", body)

    async def get_user(self, user_id):
        return self._record("get_user", user_id)

    async def update_user(self, user_id, body):
        return self._record("update_user", user_id, body)

    async def deactivate_user(self, user_id):
        return self._record("deactivate_user", user_id)

    async def delete_user(self, user_id):
        return self._record("delete_user", user_id)

    async def create_group(self, body):
        return self._record("create_group", body)

    async def assign_user_to_group(self, group_id, user_id):
        return self._record("assign_user_to_group", group_id, user_id)

    async def assign_user_to_application(self, app_id, body):
        return self._record("assign_user_to_application", app_id, body)

    async def assign_group_to_application(self, app_id, group_id, body=None):
        return self._record("assign_group_to_application", app_id, group_id, body)

    async def delete_application(self, app_id):
        return self._record("delete_application", app_id)

    async def deactivate_application(self, app_id):
        return self._record("deactivate_application", app_id)


@pytest.fixture
def fake_client():
    return FakeOktaClient()


@pytest.fixture
def settings():
    return OktaSettings(domain="test.okta.com", token="test-token")


@pytest.fixture(autouse=True)
def clean_env():
    """Clean Okta environment variables before each test."""
    env_vars_to_clean = [
        "OKTA_DOMAIN",
        "OKTA_API_TOKEN",
        "API_TOKEN",
        "OKTA_HTTP_TIMEOUT",
        "OKTA_SANITIZE_SINGLE_RESPONSES",
        "OKTA_LOG_LEVEL",
    ]

    original_values = {}
    for var in env_vars_to_clean:
        original_values[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def sample_user():
    """A user as returned by GET /api/v1/users/{id}."""
    return {
        "id": "00u1abcd",
        "status": "ACTIVE",
        "created": "2024-01-01T00:00:00.000Z",
        "activated": None,
        "type": {"id": "oty1"},
        "profile": {
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "jane@example.com",
            "login": "jane@example.com",
        },
        "credentials": {"provider": {"type": "OKTA", "name": "OKTA"}},
        "_links": {"self": {"href": "https://test.okta.com/api/v1/users/00u1abcd"}},
    }
