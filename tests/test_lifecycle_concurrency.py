"""
Two sessions on one file-backed SQLite database. A competing operation is
committed from the second session inside the first operation's unit of work,
right before its write.
"""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hometail.core.result import ErrorKind
from hometail.db import enable_sqlite_foreign_keys
from hometail.models import AdoptionRequest, Animal, Base, RequestStatus
from hometail.domains.adoption.service.lifecycle_service import AdoptionLifecycleService

NOW = datetime(2026, 6, 15, 12, 0, 0)


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'hometail.db'}",
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def other_db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def service(db):
    return AdoptionLifecycleService(db, now=lambda: NOW)


@pytest.fixture
def rival(other_db):
    return AdoptionLifecycleService(other_db, now=lambda: NOW)


def _open(service, animal, user, note="We have a big garden."):
    result = service.create_request(animal.animal_id, user.user_id, note)
    assert result.ok, result.failure
    return result.value["request_id"]


def _run_first(monkeypatch, target, name, competing):
    """Commit ``competing`` from the other session just before ``target.name`` runs."""
    original = getattr(target, name)

    def wrapped(*args, **kwargs):
        competing()
        return original(*args, **kwargs)

    monkeypatch.setattr(target, name, wrapped)


def _statuses(other_db, animal_id):
    other_db.expire_all()
    rows = other_db.query(AdoptionRequest).filter(AdoptionRequest.animal_id == animal_id).all()
    return {r.requester_id: r.status for r in rows}


def test_competing_approvals_leave_one_winner(service, rival, other_db, users, animals, monkeypatch):
    max_id = animals["max"].animal_id
    owner_id = users["owner"].user_id
    alice_req = _open(service, animals["max"], users["alice"])
    bob_req = _open(service, animals["max"], users["bob"])

    def approve_bob():
        assert rival.decide(bob_req, "APPROVED", owner_id).ok

    _run_first(monkeypatch, service.repo, "approve_if_pending", approve_bob)

    result = service.decide(alice_req, "APPROVED", owner_id)

    assert not result.ok
    assert result.failure.kind == ErrorKind.INVALID_STATE
    statuses = _statuses(other_db, max_id)
    assert statuses == {
        users["alice"].user_id: RequestStatus.REJECTED,
        users["bob"].user_id: RequestStatus.APPROVED,
    }
    assert other_db.get(Animal, max_id).is_adopted is True


def test_request_created_while_animal_is_being_adopted_is_refused(service, rival, other_db, users, animals, monkeypatch):
    max_id = animals["max"].animal_id
    owner_id = users["owner"].user_id
    alice_id = users["alice"].user_id
    bob_req = _open(rival, animals["max"], users["bob"])

    def approve_bob():
        assert rival.decide(bob_req, "APPROVED", owner_id).ok

    _run_first(monkeypatch, service.repo, "create_request", approve_bob)

    result = service.create_request(max_id, alice_id, "Please pick us.")

    assert not result.ok
    assert result.failure.kind == ErrorKind.CONFLICT_ALREADY_ADOPTED
    assert result.failure.code == "ADOPT_CREATE_409_1"
    assert alice_id not in _statuses(other_db, max_id)
    pending = (
        other_db.query(AdoptionRequest)
        .filter(AdoptionRequest.animal_id == max_id, AdoptionRequest.status == RequestStatus.PENDING)
        .count()
    )
    assert pending == 0


def test_note_edit_after_competing_approval_is_refused(service, rival, other_db, users, animals, monkeypatch):
    owner_id = users["owner"].user_id
    alice_id = users["alice"].user_id
    alice_req = _open(service, animals["max"], users["alice"], note="original")

    def approve_alice():
        assert rival.decide(alice_req, "APPROVED", owner_id).ok

    _run_first(monkeypatch, service.repo, "update_note_if_pending", approve_alice)

    result = service.update_note(alice_req, "edited after approval", alice_id)

    assert not result.ok
    assert result.failure.kind == ErrorKind.INVALID_STATE
    assert result.failure.code == "ADOPT_NOTE_400_1"
    other_db.expire_all()
    stored = other_db.get(AdoptionRequest, alice_req)
    assert stored.status == RequestStatus.APPROVED
    assert stored.note == "original"


def test_note_edit_after_competitor_approved_is_refused(service, rival, other_db, users, animals, monkeypatch):
    owner_id = users["owner"].user_id
    alice_id = users["alice"].user_id
    alice_req = _open(service, animals["max"], users["alice"], note="original")
    bob_req = _open(service, animals["max"], users["bob"])

    def approve_bob():
        assert rival.decide(bob_req, "APPROVED", owner_id).ok

    _run_first(monkeypatch, service.repo, "update_note_if_pending", approve_bob)

    result = service.update_note(alice_req, "still hoping", alice_id)

    # the fan-out rejected alice's request as part of the approval
    assert result.failure.kind == ErrorKind.INVALID_STATE
    other_db.expire_all()
    assert other_db.get(AdoptionRequest, alice_req).note == "original"
