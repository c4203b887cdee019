import models


def test_favorites_round_trip(client, make_user, make_property, auth_headers):
    user = make_user()
    headers = auth_headers(user)
    prop = make_property()

    added = client.post("/api/favorites", json={"propertyId": prop.id}, headers=headers)
    assert added.status_code == 201
    assert added.json()["propertyId"] == prop.id
    assert added.json()["userId"] == user.id
    assert added.json()["id"].startswith("fav-")

    listed = client.get("/api/favorites", headers=headers).json()
    assert [p["id"] for p in listed] == [prop.id]

    removed = client.delete(f"/api/favorites/{prop.id}", headers=headers)
    assert removed.status_code == 204
    assert removed.content == b""

    assert client.get("/api/favorites", headers=headers).json() == []


def test_add_favorite_twice_conflicts(client, db_session, make_user, make_property, auth_headers):
    user = make_user()
    headers = auth_headers(user)
    prop = make_property()

    assert client.post("/api/favorites", json={"propertyId": prop.id}, headers=headers).status_code == 201
    second = client.post("/api/favorites", json={"propertyId": prop.id}, headers=headers)

    assert second.status_code == 409
    assert second.json()["message"] == "Property already in favorites"
    assert db_session.query(models.Favorite).count() == 1


def test_same_property_favorited_by_two_users(client, make_user, make_property, auth_headers):
    prop = make_property()
    for user in (make_user(), make_user()):
        response = client.post("/api/favorites", json={"propertyId": prop.id}, headers=auth_headers(user))
        assert response.status_code == 201


def test_favorites_list_includes_agent_and_only_own(client, make_user, make_property, auth_headers):
    agent = make_user(username="agent007")
    owner = make_user()
    other = make_user()
    mine = make_property(agent_id=agent.id)
    theirs = make_property()

    client.post("/api/favorites", json={"propertyId": mine.id}, headers=auth_headers(owner))
    client.post("/api/favorites", json={"propertyId": theirs.id}, headers=auth_headers(other))

    listed = client.get("/api/favorites", headers=auth_headers(owner)).json()

    assert [p["id"] for p in listed] == [mine.id]
    assert listed[0]["agent"]["username"] == "agent007"


def test_add_favorite_requires_property_id(client, make_user, auth_headers):
    response = client.post("/api/favorites", json={}, headers=auth_headers(make_user()))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "propertyId"


def test_add_favorite_unknown_property(client, make_user, auth_headers):
    response = client.post("/api/favorites", json={"propertyId": "prop-nope"}, headers=auth_headers(make_user()))
    assert response.status_code == 404


def test_remove_missing_favorite(client, make_user, make_property, auth_headers):
    prop = make_property()
    response = client.delete(f"/api/favorites/{prop.id}", headers=auth_headers(make_user()))

    assert response.status_code == 404
    assert response.json()["message"] == "Favorite not found"


def test_favorites_require_authentication(client, make_property):
    prop = make_property()

    assert client.get("/api/favorites").status_code == 401
    assert client.post("/api/favorites", json={"propertyId": prop.id}).status_code == 401
    assert client.delete(f"/api/favorites/{prop.id}").status_code == 401
    assert client.get("/api/favorites", headers={"Authorization": "Bearer expired.or.forged"}).status_code == 401
