import copy
import itertools
import os
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

# Set required environment variables for testing
os.environ["SUPABASE_URL"] = "http://supabase.test"
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ["AUTH_RATE_LIMIT"] = "1000/minute"

from app.main import app
from app.database.supabase_client import get_supabase
from app.modules.auth.service import clear_auth_cache


# ===== In-memory stand-in for the Supabase client =====

TABLE_DEFAULTS = {
    "families": {},
    "users": {"family_id": None, "onboarding_completed": False},
    "chores": {
        "description": None, "assigned_to": None, "points": 10,
        "status": "open", "due_date": None, "completed_at": None,
    },
    "shopping_items": {"checked": False, "category": None},
    "meal_slots": {"meal_name": None, "recipe_notes": None},
}
UNIQUE_COLUMNS = {"users": ("email",)}


class FakeAPIError(Exception):
    """Mimics a PostgREST error: message plus Postgres error code"""
    def __init__(self, message, code):
        super().__init__(message)
        self.code = code


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Supports the subset of the postgrest query builder the services use"""

    def __init__(self, db, name):
        self.db = db
        self.name = name
        self._op = "select"
        self._payload = None
        self._filters = []
        self._order = None
        self._limit = None
        self._offset = 0

    def select(self, columns="*"):
        self._op = "select"
        return self

    def insert(self, payload):
        self._op = "insert"
        self._payload = payload if isinstance(payload, list) else [payload]
        return self

    def update(self, payload):
        self._op = "update"
        self._payload = payload
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def offset(self, count):
        self._offset = count
        return self

    def execute(self):
        rows = self.db.tables[self.name]
        if self.db.fail_tables.get(self.name):
            raise FakeAPIError(self.db.fail_tables[self.name], "XX000")

        if self._op == "insert":
            inserted = []
            for payload in self._payload:
                row = {**TABLE_DEFAULTS[self.name], **payload}
                row.setdefault("id", str(uuid.uuid4()))
                row.setdefault("created_at", self.db.next_timestamp())
                for column in UNIQUE_COLUMNS.get(self.name, ()):
                    if any(existing.get(column) == row.get(column) for existing in rows):
                        raise FakeAPIError(
                            f'duplicate key value violates unique constraint "{self.name}_{column}_key"',
                            "23505",
                        )
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return FakeResponse(inserted)

        matched = [row for row in rows if all(check(row) for check in self._filters)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResponse(copy.deepcopy(matched))

        if self._op == "delete":
            matched_ids = {row["id"] for row in matched}
            self.db.tables[self.name] = [row for row in rows if row["id"] not in matched_ids]
            return FakeResponse(copy.deepcopy(matched))

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: row.get(column) or "", reverse=desc)
        matched = matched[self._offset:]
        if self._limit is not None:
            matched = matched[:self._limit]
        return FakeResponse(copy.deepcopy(matched))


class FakeAuth:
    def __init__(self):
        self.accounts = {}
        self.passwords = {}
        self.sign_out_calls = 0

    @staticmethod
    def token_for(email):
        return f"token-{email}"

    def add_account(self, email, password="secret123", name=None):
        user = SimpleNamespace(
            id=str(uuid.uuid4()),
            email=email,
            user_metadata={"name": name} if name else {},
            app_metadata={},
            created_at="2026-01-01T00:00:00+00:00",
            updated_at=None,
        )
        self.accounts[email] = user
        self.passwords[email] = password
        return self.token_for(email)

    def sign_up(self, credentials):
        email = credentials["email"]
        if email in self.accounts:
            raise Exception("User already registered")
        name = credentials.get("options", {}).get("data", {}).get("name")
        self.add_account(email, credentials["password"], name)
        return SimpleNamespace(user=self.accounts[email], session=None)

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        return SimpleNamespace(
            user=self.accounts[email],
            session=SimpleNamespace(access_token=self.token_for(email)),
        )

    def get_user(self, jwt=None):
        email = (jwt or "").removeprefix("token-")
        if not jwt or not jwt.startswith("token-") or email not in self.accounts:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.accounts[email])

    def sign_out(self):
        self.sign_out_calls += 1


class FakeSupabase:
    def __init__(self):
        self.tables = {name: [] for name in TABLE_DEFAULTS}
        self.auth = FakeAuth()
        self.fail_tables = {}
        self._clock = itertools.count()
        self._epoch = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def next_timestamp(self):
        return (self._epoch + timedelta(seconds=next(self._clock))).isoformat()

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, name, /, **filters):
        return [
            row for row in self.tables[name]
            if all(row.get(column) == value for column, value in filters.items())
        ]


# ===== Fixtures =====

@pytest.fixture
def supabase():
    """Fresh in-memory backend, wired into the app for the duration of a test"""
    fake = FakeSupabase()
    clear_auth_cache()
    app.dependency_overrides[get_supabase] = lambda: fake
    yield fake
    app.dependency_overrides.clear()
    clear_auth_cache()


@pytest.fixture
def client(supabase):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(supabase):
    """Create an auth account and return its Authorization headers"""
    def _make(email="pat@example.com", name="Pat Parent", password="secret123"):
        token = supabase.auth.add_account(email, password, name)
        return {"Authorization": f"Bearer {token}"}
    return _make


@pytest.fixture
def auth_headers(make_user):
    return make_user()


@pytest.fixture
def family_headers(client, auth_headers):
    """Identity that has named its family (onboarding step 1 done)"""
    response = client.post("/api/v1/onboarding/family", json={"name": "The Smiths"}, headers=auth_headers)
    assert response.status_code == 201
    return auth_headers


@pytest.fixture
def onboarded_headers(client, family_headers):
    """Identity with a two-member family and onboarding completed"""
    response = client.post(
        "/api/v1/onboarding/members",
        json={"name": "Sam", "role": "child"},
        headers=family_headers,
    )
    assert response.status_code == 201
    response = client.post("/api/v1/onboarding/finish", headers=family_headers)
    assert response.status_code == 200
    return family_headers
