import threading

import pytest

from blog_service.db import SessionLocal
from blog_service.errors import Conflict, NotFound
from blog_service.store import CredentialStore


@pytest.fixture()
def store():
    db = SessionLocal()
    try:
        yield CredentialStore(db)
    finally:
        db.close()


def test_create_and_find(store):
    user = store.create("alice", "hashed")
    assert user.username == "alice"
    assert user.id

    assert store.find_by_username("alice") == user
    assert store.find_by_id(user.id) == user


def test_ids_are_unique(store):
    a = store.create("alice", "h1")
    b = store.create("bob", "h2")
    assert a.id != b.id


def test_duplicate_username_is_conflict(store):
    store.create("alice", "h1")
    with pytest.raises(Conflict):
        store.create("alice", "h2")
    # the store is still usable after the failed insert
    assert store.find_by_username("alice").password_hash == "h1"


def test_missing_user_is_not_found(store):
    with pytest.raises(NotFound):
        store.find_by_username("nobody")
    with pytest.raises(NotFound):
        store.find_by_id("00000000-0000-0000-0000-000000000000")


def test_concurrent_registration_has_single_winner():
    attempts = 8
    barrier = threading.Barrier(attempts)
    results = []
    lock = threading.Lock()

    def register():
        db = SessionLocal()
        try:
            barrier.wait()
            try:
                CredentialStore(db).create("carol", "hashed")
                outcome = "ok"
            except Conflict:
                outcome = "conflict"
        finally:
            db.close()
        with lock:
            results.append(outcome)

    threads = [threading.Thread(target=register) for _ in range(attempts)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("conflict") == attempts - 1
