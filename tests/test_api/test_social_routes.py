# tests/test_api/test_social_routes.py


def test_create_user_returns_token(client):
    response = client.post("/users", json={"email": "new@example.com", "username": "newbie"})
    assert response.status_code == 201
    created = response.json()
    assert created["username"] == "newbie"
    assert created["api_token"]

    headers = {"Authorization": f"Bearer {created['api_token']}"}
    assert client.put("/my-books/101", json={"status": "reading"}, headers=headers).status_code == 200


def test_create_duplicate_user(client, sample_user):
    response = client.post("/users", json={"email": "ada@example.com"})
    assert response.status_code == 400


def test_search_users(client, sample_user, other_user):
    response = client.get("/users", params={"q": "gra"})
    assert response.json()["total"] == 1
    assert response.json()["items"][0]["username"] == "grace"
    assert client.get("/users").json() == {"items": [], "total": 0}


def test_follow_and_profile(client, auth_headers, sample_user, other_user):
    response = client.post("/users/grace/follow", headers=auth_headers)
    assert response.json() == {"success": True, "following": True}

    profile = client.get("/users/grace", headers=auth_headers).json()
    assert profile["followers_count"] == 1
    assert profile["is_following"] is True
    assert client.get("/users/grace").json()["is_following"] is False

    assert [u["username"] for u in client.get("/users/grace/followers").json()] == ["ada"]
    assert [u["username"] for u in client.get("/users/ada/following").json()] == ["grace"]

    response = client.delete("/users/grace/follow", headers=auth_headers)
    assert response.json() == {"success": True, "following": False}
    assert client.get("/users/grace").json()["followers_count"] == 0


def test_follow_errors(client, auth_headers, sample_user):
    assert client.post("/users/ada/follow", headers=auth_headers).status_code == 400
    assert client.post("/users/nobody/follow", headers=auth_headers).status_code == 404
    assert client.post("/users/ada/follow").status_code == 401


def test_missing_profile(client):
    assert client.get("/users/nobody").status_code == 404
    assert client.get("/users/nobody/books").status_code == 404


def test_public_shelf_hides_private_books(client, auth_headers, other_headers):
    client.put("/my-books/101", json={"status": "reading"}, headers=auth_headers)
    record_id = client.put("/my-books/202", json={"status": "finished"}, headers=auth_headers).json()["id"]
    client.patch(f"/my-books/records/{record_id}/privacy", json={"is_private": True}, headers=auth_headers)

    visible = client.get("/users/ada/books", headers=other_headers).json()
    assert [b["hardcover_id"] for b in visible] == ["101"]
    own = client.get("/users/ada/books", headers=auth_headers).json()
    assert {b["hardcover_id"] for b in own} == {"101", "202"}


def test_user_reviews(client, auth_headers):
    client.post("/books/101/reviews", json={"rating": 9}, headers=auth_headers)
    reviews = client.get("/users/ada/reviews").json()
    assert reviews["total"] == 1
    assert reviews["items"][0]["book"]["title"] == "The Left Hand of Darkness"


def test_feed(client, auth_headers, other_headers, third_user):
    """The feed holds the caller's and followed readers' activity."""
    client.post("/users/grace/follow", headers=auth_headers)
    client.put("/my-books/202", json={"status": "reading"}, headers=other_headers)
    client.put("/my-books/101", json={"status": "want_to_read"}, headers=auth_headers)
    client.put(
        "/my-books/303",
        json={"status": "reading"},
        headers={"Authorization": f"Bearer {third_user.api_token}"}
    )

    items = client.get("/feed", headers=auth_headers).json()["items"]
    assert {(i["username"], i["hardcover_id"]) for i in items} == {("grace", "202"), ("ada", "101")}
    assert all(i["activity_type"] == "added_to_library" for i in items)
    grace_event = next(i for i in items if i["username"] == "grace")
    assert grace_event["book_title"] == "Piranesi"
    assert grace_event["metadata"] == {"new_status": "reading"}

    assert client.get("/feed").json() == {"items": []}
    assert len(client.get("/feed/recent").json()["items"]) == 3
    assert len(client.get("/users/linus/activity").json()["items"]) == 1
