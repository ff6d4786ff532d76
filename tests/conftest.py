"""Shared fixtures: in-memory SQLite database, seeded users/animals, API client."""

import os

os.environ.setdefault("SQLALCHEMY_URL", "sqlite://")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hometail.core.identity import AuthenticationError, Identity, get_identity, get_optional_identity
from hometail.db import enable_sqlite_foreign_keys, get_db
from hometail.main import create_app
from hometail.models import (
    Animal,
    Base,
    Breed,
    Category,
    Gender,
    Size,
    User,
    UserRole,
)

TODAY = date(2026, 6, 15)
NOW = datetime(2026, 6, 15, 12, 0, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def users(db):
    """owner, two requesters and an administrator."""
    rows = {
        "owner": User(firebase_uid="uid-owner", full_name="Olivia Owner", email="owner@example.com", phone="555-0100"),
        "alice": User(firebase_uid="uid-alice", full_name="Alice Adopter", email="alice@example.com"),
        "bob": User(firebase_uid="uid-bob", full_name="Bob Builder", email="bob@example.com"),
        "admin": User(firebase_uid="uid-admin", full_name="Ada Admin", email="admin@example.com", role=UserRole.ADMIN),
    }
    db.add_all(rows.values())
    db.commit()
    return rows


@pytest.fixture
def taxonomy(db):
    dog = Category(name="Dog")
    cat = Category(name="Cat")
    db.add_all([dog, cat])
    db.flush()
    golden = Breed(category_id=dog.category_id, name="Golden Retriever")
    poodle = Breed(category_id=dog.category_id, name="Poodle")
    siamese = Breed(category_id=cat.category_id, name="Siamese")
    db.add_all([golden, poodle, siamese])
    db.commit()
    return {"dog": dog, "cat": cat, "golden": golden, "poodle": poodle, "siamese": siamese}


@pytest.fixture
def animals(db, users, taxonomy):
    """
    Ages relative to TODAY:
    max 3 years (ADULT), bella 2 months (BABY), luna 1 year (YOUNG),
    rex 10 years (SENIOR, adopted), misty no birthday.
    """
    owner = users["owner"]
    rows = {
        "max": Animal(
            owner_id=owner.user_id, name="Max", category_id=taxonomy["dog"].category_id,
            breed_id=taxonomy["golden"].breed_id, gender=Gender.MALE, size=Size.LARGE,
            birthday=date(2023, 6, 15), short_description="Friendly family dog",
        ),
        "bella": Animal(
            owner_id=owner.user_id, name="Bella", category_id=taxonomy["dog"].category_id,
            breed_id=taxonomy["poodle"].breed_id, gender=Gender.FEMALE, size=Size.SMALL,
            birthday=date(2026, 4, 15), short_description="Curly puppy, 100% cuddles",
        ),
        "luna": Animal(
            owner_id=owner.user_id, name="Luna", category_id=taxonomy["cat"].category_id,
            breed_id=taxonomy["siamese"].breed_id, gender=Gender.FEMALE, size=Size.SMALL,
            birthday=date(2025, 6, 1), short_description="Quiet indoor_cat",
        ),
        "rex": Animal(
            owner_id=owner.user_id, name="Rex", category_id=taxonomy["dog"].category_id,
            breed_id=None, gender=Gender.MALE, size=Size.EXTRA_LARGE,
            birthday=date(2016, 1, 1), short_description="Old guard dog", is_adopted=True,
        ),
        "misty": Animal(
            owner_id=users["bob"].user_id, name="Misty", category_id=taxonomy["cat"].category_id,
            breed_id=None, gender=Gender.UNKNOWN, size=None,
            birthday=None, short_description=None,
        ),
    }
    db.add_all(rows.values())
    db.commit()
    return rows


class IdentityStub:
    """Switchable caller for API tests; ``None`` means no Authorization header."""

    def __init__(self):
        self.current = None

    def act_as(self, user: User):
        self.current = Identity(user_id=user.user_id, role=user.role)

    def sign_out(self):
        self.current = None

    def required(self) -> Identity:
        if self.current is None:
            raise AuthenticationError("AUTH_401_1", "Authorization header is required.")
        return self.current

    def optional(self):
        return self.current


@pytest.fixture
def caller():
    return IdentityStub()


@pytest.fixture
def client(db, caller):
    app = create_app()

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_identity] = caller.required
    app.dependency_overrides[get_optional_identity] = caller.optional

    with TestClient(app) as c:
        yield c
