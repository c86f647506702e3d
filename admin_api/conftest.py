import copy
import re
import types
from datetime import datetime, timedelta

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

from admin_api.config import AdminAPISettings
from admin_api.main import create_app
from admin_api.utils.security import PasswordHasher


# ----- In-memory stand-ins for the pymongo API used by AdminStore -----

def _matches(doc, filt):
    for key, cond in filt.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in cond):
                return False
        elif isinstance(cond, dict) and "$regex" in cond:
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            value = doc.get(key)
            if not isinstance(value, str) or not re.search(cond["$regex"], value, flags):
                return False
        elif doc.get(key) != cond:
            return False
    return True


def _project(doc, projection):
    doc = copy.deepcopy(doc)
    for key, flag in (projection or {}).items():
        if not flag:
            doc.pop(key, None)
    return doc


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, key, direction):
        self._docs = sorted(self._docs, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def skip(self, n):
        self._docs = self._docs[n:]
        return self

    def limit(self, n):
        if n:
            self._docs = self._docs[:n]
        return self

    def __iter__(self):
        return iter(self._docs)


class FakeCollection:
    def __init__(self):
        self.docs = []
        self.error = None  # set to an exception to make every call fail

    def _check(self):
        if self.error is not None:
            raise self.error

    def find(self, filt=None, projection=None):
        self._check()
        return FakeCursor([_project(d, projection) for d in self.docs if _matches(d, filt or {})])

    def find_one(self, filt=None, projection=None):
        self._check()
        for d in self.docs:
            if _matches(d, filt or {}):
                return _project(d, projection)
        return None

    def count_documents(self, filt):
        self._check()
        return sum(1 for d in self.docs if _matches(d, filt))

    def insert_one(self, doc):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return types.SimpleNamespace(inserted_id=doc["_id"])

    def find_one_and_update(self, filt, update, projection=None, return_document=ReturnDocument.BEFORE):
        self._check()
        for d in self.docs:
            if _matches(d, filt):
                before = _project(d, projection)
                d.update(update.get("$set", {}))
                return _project(d, projection) if return_document == ReturnDocument.AFTER else before
        return None


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())


# ----- Fixtures -----

@pytest.fixture
def settings():
    return AdminAPISettings(
        _env_file=None,
        MONGODB_URI="mongodb://localhost:27017",
        DATABASE_NAME="admin_api_test",
        JWT_SECRET_KEY="test-secret",
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture
def hasher(settings):
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


@pytest.fixture
def database():
    return FakeDatabase()


@pytest.fixture
def collection(database, settings):
    return database[settings.ADMIN_COLLECTION]


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_admin(collection, hasher):
    """Insert an admin document directly and return it (with its _id)"""
    counter = {"n": 0}

    def _make(email=None, password="longenough1", **fields):
        counter["n"] += 1
        doc = {
            "email": email or f"admin{counter['n']}@example.com",
            "password": hasher.hash(password),
            "name": None,
            "surname": None,
            "role": "admin",
            "enabled": True,
            "removed": False,
            "createdAt": datetime(2024, 1, 1) + timedelta(minutes=counter["n"]),
        }
        doc.update(fields)
        collection.insert_one(doc)
        return doc

    return _make


@pytest.fixture
def current_admin(make_admin):
    return make_admin(email="root@example.com", name="Root", surname="User")


@pytest.fixture
def auth_headers(app, current_admin):
    token = app.state.jwt_auth.create_access_token(str(current_admin["_id"]), current_admin["email"])
    return {"Authorization": f"Bearer {token}"}
