from datetime import datetime

from snuggle.models import Blog, Profile

from conftest import auth_headers


def test_sync_profile_from_metadata(client, db_session, user_metadata):
    user_metadata["kakao-1"] = {"picture": "https://img/p.png", "full_name": "Kim"}

    response = client.post("/api/profile/sync", headers=auth_headers("kakao-1"))
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == "kakao-1"
    assert data["profile_image_url"] == "https://img/p.png"
    assert data["nickname"] == "Kim"

    user_metadata["kakao-1"] = {"avatar_url": "https://img/new.png", "name": "Kimchi"}
    data = client.post("/api/profile/sync", headers=auth_headers("kakao-1")).json()
    assert data["profile_image_url"] == "https://img/new.png"
    assert data["nickname"] == "Kimchi"
    assert db_session.query(Profile).count() == 1


def test_profile_requires_auth(client):
    assert client.post("/api/profile/sync").status_code == 401
    assert client.get("/api/profile/status").status_code == 401


def test_delete_account_cascades_to_blogs(client, db_session, make_profile, make_blog):
    make_profile("u1")
    active = make_blog(user_id="u1", name="activo")
    already_deleted = make_blog(user_id="u1", name="viejo", deleted_at=datetime(2020, 1, 1))
    other = make_blog(user_id="u2", name="ajeno")

    assert client.get("/api/profile/status", headers=auth_headers("u1")).json() == {
        "isDeleted": False, "deletedAt": None,
    }

    response = client.delete("/api/profile", headers=auth_headers("u1"))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    status = client.get("/api/profile/status", headers=auth_headers("u1")).json()
    assert status["isDeleted"] is True
    assert status["deletedAt"] is not None

    db_session.expire_all()
    assert db_session.get(Blog, active.id).deleted_at is not None
    assert db_session.get(Blog, already_deleted.id).deleted_at == datetime(2020, 1, 1)
    assert db_session.get(Blog, other.id).deleted_at is None


def test_restore_account(client, make_profile):
    make_profile("u1")
    client.delete("/api/profile", headers=auth_headers("u1"))

    response = client.post("/api/profile/restore", headers=auth_headers("u1"))
    assert response.status_code == 200
    assert client.get("/api/profile/status", headers=auth_headers("u1")).json()["isDeleted"] is False


def test_delete_and_restore_blog(client, make_blog):
    blog = make_blog(user_id="u1", name="mio")

    assert client.delete(f"/api/profile/blog/{blog.id}", headers=auth_headers("u2")).status_code == 403

    assert client.delete(f"/api/profile/blog/{blog.id}", headers=auth_headers("u1")).status_code == 200
    deleted = client.get("/api/profile/blogs/deleted", headers=auth_headers("u1")).json()
    assert [b["name"] for b in deleted] == ["mio"]
    assert client.get(f"/api/blogs/{blog.id}").status_code == 404

    assert client.post(f"/api/profile/blog/{blog.id}/restore", headers=auth_headers("u1")).status_code == 200
    assert client.get("/api/profile/blogs/deleted", headers=auth_headers("u1")).json() == []
    assert client.get(f"/api/blogs/{blog.id}").status_code == 200
