from datetime import datetime

from snuggle.models import Category, Post

from conftest import auth_headers


def _post(db_session, blog, title="Hola", published=True, created_at=None, **kwargs):
    post = Post(
        blog_id=blog.id,
        user_id=blog.user_id,
        title=title,
        content=kwargs.pop("content", ""),
        published=published,
        created_at=created_at or datetime(2024, 1, 1),
        **kwargs,
    )
    db_session.add(post)
    db_session.commit()
    db_session.refresh(post)
    return post


def test_list_posts_only_published_with_blog(client, db_session, make_blog):
    blog = make_blog(name="Mi blog", thumbnail_url="https://img/blog.png")
    _post(db_session, blog, title="viejo", created_at=datetime(2024, 1, 1))
    _post(db_session, blog, title="nuevo", created_at=datetime(2024, 1, 2))
    _post(db_session, blog, title="borrador", published=False)

    response = client.get("/api/posts")
    assert response.status_code == 200
    data = response.json()
    assert [p["title"] for p in data] == ["nuevo", "viejo"]
    assert data[0]["blog"] == {"name": "Mi blog", "thumbnail_url": "https://img/blog.png"}


def test_list_posts_pagination(client, db_session, make_blog):
    blog = make_blog()
    for day in range(1, 6):
        _post(db_session, blog, title=f"p{day}", created_at=datetime(2024, 1, day))

    data = client.get("/api/posts", params={"limit": 2, "offset": 1}).json()
    assert [p["title"] for p in data] == ["p4", "p3"]


def test_blog_posts_hide_drafts_from_visitors(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    _post(db_session, blog, title="publico")
    _post(db_session, blog, title="borrador", published=False)

    data = client.get(f"/api/posts/blog/{blog.id}", params={"showAll": "true"}).json()
    assert [p["title"] for p in data] == ["publico"]

    data = client.get(
        f"/api/posts/blog/{blog.id}",
        params={"showAll": "true"},
        headers=auth_headers("someone-else"),
    ).json()
    assert [p["title"] for p in data] == ["publico"]


def test_blog_posts_show_drafts_to_owner(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    _post(db_session, blog, title="publico", created_at=datetime(2024, 1, 1))
    _post(db_session, blog, title="borrador", published=False, created_at=datetime(2024, 1, 2))

    data = client.get(
        f"/api/posts/blog/{blog.id}",
        params={"showAll": "true"},
        headers=auth_headers("owner"),
    ).json()
    assert [p["title"] for p in data] == ["borrador", "publico"]

    # Sin showAll el dueño también ve solo los publicados
    data = client.get(f"/api/posts/blog/{blog.id}", headers=auth_headers("owner")).json()
    assert [p["title"] for p in data] == ["publico"]


def test_get_post_detail(client, db_session, make_blog, make_profile):
    make_profile("owner", nickname="Ana", profile_image_url="https://img/ana.png")
    blog = make_blog(user_id="owner", name="Blog de Ana")
    category = Category(blog_id=blog.id, name="Viajes")
    db_session.add(category)
    db_session.commit()
    post = _post(db_session, blog, category_id=category.id)

    response = client.get(f"/api/posts/{post.id}")
    assert response.status_code == 200
    data = response.json()
    assert data["blog"]["name"] == "Blog de Ana"
    assert data["blog"]["user_id"] == "owner"
    assert data["category"] == {"id": category.id, "name": "Viajes"}
    assert data["profile"]["nickname"] == "Ana"


def test_get_missing_post_returns_404(client, db_session):
    assert client.get("/api/posts/does-not-exist").status_code == 404


def test_unpublished_post_visible_only_to_owner(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    post = _post(db_session, blog, published=False)

    assert client.get(f"/api/posts/{post.id}").status_code == 404
    assert client.get(f"/api/posts/{post.id}", headers=auth_headers("intruder")).status_code == 404
    assert client.get(f"/api/posts/{post.id}", headers=auth_headers("owner")).status_code == 200


def test_create_post_requires_auth(client, make_blog):
    blog = make_blog()
    response = client.post("/api/posts", json={"blog_id": blog.id, "title": "x"})
    assert response.status_code == 401

    response = client.post(
        "/api/posts",
        json={"blog_id": blog.id, "title": "x"},
        headers={"Authorization": "Bearer bad-token"},
    )
    assert response.status_code == 401


def test_create_post_in_foreign_blog_is_forbidden(client, make_blog):
    blog = make_blog(user_id="owner")
    response = client.post(
        "/api/posts",
        json={"blog_id": blog.id, "title": "x"},
        headers=auth_headers("intruder"),
    )
    assert response.status_code == 403


def test_create_post(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    other_blog = make_blog(user_id="owner")
    categories = [Category(blog_id=blog.id, name=f"c{i}") for i in range(7)]
    foreign = Category(blog_id=other_blog.id, name="ajena")
    db_session.add_all(categories + [foreign])
    db_session.commit()
    category_ids = [foreign.id] + [c.id for c in categories]

    response = client.post(
        "/api/posts",
        json={
            "blog_id": blog.id,
            "title": "  Mi viaje  ",
            "content": '<p>hola</p><img src="https://cdn/a.png"><img src="https://cdn/b.png">',
            "category_ids": category_ids,
        },
        headers=auth_headers("owner"),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["title"] == "Mi viaje"
    assert data["published"] is True
    assert data["thumbnail_url"] == "https://cdn/a.png"
    assert data["user_id"] == "owner"

    detail = client.get(f"/api/posts/{data['id']}").json()
    assert detail["category_ids"] == [c.id for c in categories[:5]]


def test_create_post_rejects_blank_title(client, make_blog):
    blog = make_blog(user_id="owner")
    response = client.post(
        "/api/posts",
        json={"blog_id": blog.id, "title": "   "},
        headers=auth_headers("owner"),
    )
    assert response.status_code == 422


def test_update_post(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    first = Category(blog_id=blog.id, name="uno")
    second = Category(blog_id=blog.id, name="dos")
    db_session.add_all([first, second])
    db_session.commit()

    post_id = client.post(
        "/api/posts",
        json={"blog_id": blog.id, "title": "t", "category_ids": [first.id]},
        headers=auth_headers("owner"),
    ).json()["id"]

    response = client.patch(
        f"/api/posts/{post_id}",
        json={
            "title": " nuevo ",
            "content": "<img src='https://cdn/new.webp'>",
            "published": False,
            "category_ids": [second.id],
        },
        headers=auth_headers("owner"),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "nuevo"
    assert data["thumbnail_url"] == "https://cdn/new.webp"
    assert data["published"] is False

    detail = client.get(f"/api/posts/{post_id}", headers=auth_headers("owner")).json()
    assert detail["category_ids"] == [second.id]


def test_update_post_by_other_user_is_forbidden(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    post = _post(db_session, blog)
    response = client.patch(f"/api/posts/{post.id}", json={"title": "x"}, headers=auth_headers("intruder"))
    assert response.status_code == 403


def test_update_missing_post_returns_404(client):
    response = client.patch("/api/posts/missing", json={"title": "x"}, headers=auth_headers("owner"))
    assert response.status_code == 404


def test_delete_post(client, db_session, make_blog):
    blog = make_blog(user_id="owner")
    post = _post(db_session, blog)
    post_id = post.id

    assert client.delete(f"/api/posts/{post_id}", headers=auth_headers("intruder")).status_code == 403

    response = client.delete(f"/api/posts/{post_id}", headers=auth_headers("owner"))
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/posts/{post_id}").status_code == 404
