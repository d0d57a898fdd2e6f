"""Routes minces + traduction des erreurs métier en codes HTTP."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.api.v1.dependencies import get_blob_store
from app.core.config import settings
from app.db.session import get_session
from app.main import app
from conftest import PNG_BYTES

API = "/api/v1"


@pytest.fixture
def client(engine, blob_store):
    def _session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def _register(client, username):
    resp = client.post(
        f"{API}/users",
        json={"username": username, "email": f"{username}@example.com", "password": "pw"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestUsersApi:
    def test_register_then_conflict(self, client):
        body = _register(client, "alice")
        assert body["profile_pic_url"] == settings.default_profile_pic_url
        assert "hashed_password" not in body

        resp = client.post(
            f"{API}/users",
            json={"username": "alice", "email": "x@example.com", "password": "pw"},
        )
        assert resp.status_code == 409

    def test_rename_and_conflict(self, client):
        _register(client, "alice")
        _register(client, "bob")

        resp = client.put(f"{API}/users/alice/settings", json={"username": "bob", "email": ""})
        assert resp.status_code == 409

        resp = client.put(f"{API}/users/alice/settings", json={"username": "alicia", "email": ""})
        assert resp.status_code == 200
        assert resp.json() == {"updated_username": "alicia", "updated_email": "alice@example.com"}

    def test_upload_like_and_delete_account(self, client, s3):
        _register(client, "alice")
        _register(client, "bob")

        resp = client.post(
            f"{API}/users/alice/images",
            files={"image": ("photo.png", PNG_BYTES, "image/png")},
        )
        assert resp.status_code == 201, resp.text
        url = resp.json()["url"]

        assert client.post(f"{API}/users/bob/likes", json={"image_url": url}).status_code == 201
        assert client.post(f"{API}/users/bob/likes", json={"image_url": url}).status_code == 409
        assert client.post(f"{API}/users/alice/followers", json={"followee_name": "bob"}).status_code == 201

        resp = client.delete(f"{API}/users/alice")
        assert resp.status_code == 200
        report = resp.json()
        assert report["user_deleted"] is True
        assert report["likes"] == 1 and report["follows"] == 1
        assert not s3.has(settings.IMAGES_BUCKET, "photo.png")

        assert client.delete(f"{API}/users/alice").status_code == 404

    def test_unsupported_media_type(self, client, s3):
        _register(client, "alice")
        resp = client.post(
            f"{API}/users/alice/images",
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )
        assert resp.status_code == 415
        assert s3.uploads == {} and s3.objects == {}

    def test_profile_pic_replacement(self, client, s3):
        _register(client, "alice")
        resp = client.post(
            f"{API}/users/alice/profile-pic",
            files={"profile_pic": ("me.png", PNG_BYTES, "image/png")},
        )
        assert resp.status_code == 200, resp.text
        assert client.get(f"{API}/users/alice/profile-pic").json()["profile_pic_url"] == resp.json()["url"]

    def test_partial_cascade_exposes_step(self, client, s3):
        _register(client, "alice")
        client.post(f"{API}/users/alice/images", files={"image": ("photo.png", PNG_BYTES, "image/png")})
        s3.fail_delete_keys.add("photo.png")

        resp = client.delete(f"{API}/users/alice")

        assert resp.status_code == 500
        assert resp.json()["step"] == "delete_image_blobs"
        assert resp.json()["orphaned_objects"] == ["photo.png"]

    def test_comment_and_image_delete(self, client):
        _register(client, "alice")
        url = client.post(
            f"{API}/users/alice/images",
            files={"image": ("photo.png", PNG_BYTES, "image/png")},
        ).json()["url"]

        resp = client.post(f"{API}/users/alice/comments", json={"image_url": url, "comment": "first"})
        assert resp.status_code == 201

        resp = client.put(
            f"{API}/users/alice/comments",
            json={"old_comment": "first", "new_comment": "edited"},
        )
        assert resp.json()["text"] == "edited"

        assert client.delete(f"{API}/users/alice/images", params={"image_url": url}).status_code == 204
        assert client.delete(f"{API}/users/alice/comments", params={"comment": "edited"}).status_code == 404
