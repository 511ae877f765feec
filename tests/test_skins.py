from datetime import datetime

import pytest

from snuggle.models import BlogSkin, BlogSkinApplication
from snuggle.models.skin import DEFAULT_SKIN_NAME
from snuggle.routers.skins import ensure_default_skin

from conftest import auth_headers


@pytest.fixture
def skins(db_session):
    default = BlogSkin(
        name=DEFAULT_SKIN_NAME, is_system=True,
        css_variables={"--bg": "#fff"}, layout_config={"sidebar": "left"},
        created_at=datetime(2024, 1, 1),
    )
    dark = BlogSkin(
        name="Oscuro", is_system=True,
        css_variables={"--bg": "#000"}, created_at=datetime(2024, 1, 2),
    )
    custom = BlogSkin(name="Privada", is_system=False, created_at=datetime(2024, 1, 3))
    db_session.add_all([default, dark, custom])
    db_session.commit()
    return {"default": default, "dark": dark, "custom": custom}


def test_list_system_skins(client, skins):
    data = client.get("/api/skins").json()
    assert [s["name"] for s in data] == [DEFAULT_SKIN_NAME, "Oscuro"]
    assert data[0]["css_variables"] == {"--bg": "#fff"}


def test_get_skin(client, skins):
    assert client.get(f"/api/skins/{skins['dark'].id}").json()["name"] == "Oscuro"
    assert client.get("/api/skins/nope").status_code == 404


def test_blog_without_skin_returns_null(client, make_blog):
    blog = make_blog()
    response = client.get(f"/api/skins/blog/{blog.id}")
    assert response.status_code == 200
    assert response.json() is None


def test_apply_skin_replaces_customizations(client, db_session, skins, make_blog):
    blog = make_blog(user_id="owner")
    db_session.add(BlogSkinApplication(
        blog_id=blog.id, skin_id=skins["default"].id, custom_css_variables={"--bg": "pink"},
    ))
    db_session.commit()

    response = client.post(
        "/api/skins/apply",
        json={"blog_id": blog.id, "skin_id": skins["dark"].id},
        headers=auth_headers("owner"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["skin_id"] == skins["dark"].id
    assert data["custom_css_variables"] is None

    applied = client.get(f"/api/skins/blog/{blog.id}").json()
    assert applied["skin"]["name"] == "Oscuro"
    assert db_session.query(BlogSkinApplication).count() == 1


def test_apply_unknown_skin(client, skins, make_blog):
    blog = make_blog(user_id="owner")
    response = client.post(
        "/api/skins/apply",
        json={"blog_id": blog.id, "skin_id": "nope"},
        headers=auth_headers("owner"),
    )
    assert response.status_code == 404


def test_apply_skin_to_foreign_blog(client, skins, make_blog):
    blog = make_blog(user_id="owner")
    response = client.post(
        "/api/skins/apply",
        json={"blog_id": blog.id, "skin_id": skins["dark"].id},
        headers=auth_headers("intruder"),
    )
    assert response.status_code == 403


def test_customize_creates_application_on_default_skin(client, skins, make_blog):
    blog = make_blog(user_id="owner")
    response = client.patch(
        f"/api/skins/customize/{blog.id}",
        json={"custom_css_variables": {"--accent": "red"}},
        headers=auth_headers("owner"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["skin_id"] == skins["default"].id
    assert data["custom_css_variables"] == {"--accent": "red"}
    assert data["custom_layout_config"] is None


def test_customize_updates_existing_application(client, skins, make_blog):
    blog = make_blog(user_id="owner")
    client.post(
        "/api/skins/apply",
        json={"blog_id": blog.id, "skin_id": skins["dark"].id},
        headers=auth_headers("owner"),
    )
    data = client.patch(
        f"/api/skins/customize/{blog.id}",
        json={"custom_layout_config": {"sidebar": "none"}},
        headers=auth_headers("owner"),
    ).json()
    assert data["skin_id"] == skins["dark"].id
    assert data["custom_layout_config"] == {"sidebar": "none"}


def test_customize_keeps_fields_not_sent(client, skins, make_blog):
    blog = make_blog(user_id="owner")
    client.patch(
        f"/api/skins/customize/{blog.id}",
        json={
            "custom_css_variables": {"--accent": "red"},
            "custom_layout_config": {"sidebar": "left"},
        },
        headers=auth_headers("owner"),
    )
    data = client.patch(
        f"/api/skins/customize/{blog.id}",
        json={"custom_layout_config": {"sidebar": "none"}},
        headers=auth_headers("owner"),
    ).json()
    assert data["custom_css_variables"] == {"--accent": "red"}
    assert data["custom_layout_config"] == {"sidebar": "none"}


def test_reset_skin(client, skins, make_blog):
    blog = make_blog(user_id="owner")
    client.post(
        "/api/skins/apply",
        json={"blog_id": blog.id, "skin_id": skins["dark"].id},
        headers=auth_headers("owner"),
    )
    response = client.delete(f"/api/skins/blog/{blog.id}", headers=auth_headers("owner"))
    assert response.status_code == 200
    assert client.get(f"/api/skins/blog/{blog.id}").json() is None


def test_ensure_default_skin_is_idempotent(db_session):
    ensure_default_skin(db_session)
    ensure_default_skin(db_session)
    assert db_session.query(BlogSkin).filter(BlogSkin.name == DEFAULT_SKIN_NAME).count() == 1
