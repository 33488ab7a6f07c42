import uuid

import pytest

POST = {"title": "hello", "body": "first post", "tags": ["intro", "misc"]}


def signed_in(make_client, username, password="pw123456"):
    c = make_client()
    r = c.post("/api/auth/register", json={"username": username, "password": password})
    assert r.status_code == 200
    return c


@pytest.fixture()
def alice(make_client):
    return signed_in(make_client, "alice")


@pytest.fixture()
def bob(make_client):
    return signed_in(make_client, "bob")


@pytest.fixture()
def bobs_post(bob):
    r = bob.post("/api/posts", json=POST)
    assert r.status_code == 200
    return r.json()


def test_write_records_owner(bob):
    r = bob.post("/api/posts", json=POST)
    assert r.status_code == 200
    data = r.json()
    assert data["owner"]["username"] == "bob"
    assert data["owner"]["id"] == bob.get("/api/auth/check").json()["id"]
    assert data["tags"] == ["intro", "misc"]


def test_write_requires_session(client):
    assert client.post("/api/posts", json=POST).status_code == 401


def test_read_is_public(client, bobs_post):
    r = client.get(f"/api/posts/{bobs_post['id']}")
    assert r.status_code == 200
    assert r.json()["title"] == "hello"


def test_malformed_and_missing_ids(client):
    malformed = client.get("/api/posts/not-an-id")
    assert malformed.status_code == 400
    assert malformed.json() == {"detail": "invalid_id"}
    assert client.get(f"/api/posts/{uuid.uuid4()}").status_code == 404


def test_anonymous_update_is_forbidden(client, bobs_post):
    r = client.patch(f"/api/posts/{bobs_post['id']}", json={"title": "pwned"})
    assert r.status_code == 403
    assert r.json() == {"detail": "forbidden"}


def test_other_user_cannot_update_or_delete(alice, bobs_post):
    url = f"/api/posts/{bobs_post['id']}"
    assert alice.patch(url, json={"title": "pwned"}).status_code == 403
    assert alice.delete(url).status_code == 403
    assert alice.get(url).json()["title"] == "hello"


def test_owner_can_update(alice):
    created = alice.post("/api/posts", json=POST).json()
    r = alice.patch(f"/api/posts/{created['id']}", json={"title": "edited"})
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "edited"
    assert data["body"] == "first post"
    assert data["owner"] == created["owner"]


def test_owner_can_delete(bob, bobs_post):
    url = f"/api/posts/{bobs_post['id']}"
    assert bob.delete(url).status_code == 204
    assert bob.get(url).status_code == 404


def test_invalid_session_cannot_update(bob, bobs_post, make_client):
    stale = make_client()
    stale.cookies.set("access_token", "eyJhbGciOiJIUzI1NiJ9.e30.invalid")
    assert stale.patch(f"/api/posts/{bobs_post['id']}", json={"title": "x"}).status_code == 403
