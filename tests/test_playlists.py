from conftest import register

API = "/api/v1/playlists"


def create_playlist(client, owner, **body):
    body.setdefault("name", "Road Trip")
    r = client.post(API, json=body, headers=owner["headers"])
    assert r.status_code == 201, r.text
    return r.json()["data"]


def song_ids(client, owner, playlist_id):
    r = client.get(f"{API}/{playlist_id}", headers=owner["headers"])
    assert r.status_code == 200, r.text
    return r.json()["data"]["songIds"]


def test_road_trip_scenario(client, alice, make_song):
    s1 = make_song("First")
    s2 = make_song("Second")

    playlist = create_playlist(client, alice, name="Road Trip")
    pid = playlist["id"]
    assert playlist["songCount"] == 0
    assert playlist["songs"] == []

    r = client.post(f"{API}/{pid}/songs", json={"songId": s1}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["songIds"] == [s1]

    r = client.post(f"{API}/{pid}/songs", json={"songId": s1}, headers=alice["headers"])
    assert r.status_code == 409
    assert r.json()["success"] is False
    assert song_ids(client, alice, pid) == [s1]

    r = client.post(f"{API}/{pid}/songs", json={"songId": s2}, headers=alice["headers"])
    data = r.json()["data"]
    assert data["songIds"] == [s1, s2]
    assert [s["title"] for s in data["songs"]] == ["First", "Second"]
    assert data["songCount"] == 2

    r = client.put(f"{API}/{pid}/reorder", json={"songIds": [s2, s1]}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["songIds"] == [s2, s1]

    r = client.delete(f"{API}/{pid}/songs/{s1}", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["songIds"] == [s2]

    r = client.delete(f"{API}/{pid}", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["success"] is True

    r = client.get(f"{API}/{pid}", headers=alice["headers"])
    assert r.status_code == 404


def test_non_owner_access(client, alice, bob):
    pid = create_playlist(client, alice, name="Secret")["id"]

    r = client.put(f"{API}/{pid}", json={"name": "Mine now"}, headers=bob["headers"])
    assert r.status_code == 403
    r = client.get(f"{API}/{pid}", headers=bob["headers"])
    assert r.status_code == 403

    r = client.put(f"{API}/{pid}", json={"isPublic": True}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["isPublic"] is True

    r = client.get(f"{API}/{pid}", headers=bob["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Secret"

    r = client.put(f"{API}/{pid}", json={"name": "Mine now"}, headers=bob["headers"])
    assert r.status_code == 403


def test_non_owner_cannot_mutate_public_playlist(client, alice, bob, make_song):
    s1 = make_song()
    pid = create_playlist(client, alice, isPublic=True)["id"]

    assert client.post(f"{API}/{pid}/songs", json={"songId": s1}, headers=bob["headers"]).status_code == 403
    assert client.delete(f"{API}/{pid}/songs/{s1}", headers=bob["headers"]).status_code == 403
    assert client.put(f"{API}/{pid}/reorder", json={"songIds": [s1]}, headers=bob["headers"]).status_code == 403
    assert client.delete(f"{API}/{pid}", headers=bob["headers"]).status_code == 403
    assert song_ids(client, alice, pid) == []


def test_read_resolves_owner(client, alice):
    pid = create_playlist(client, alice)["id"]
    owner = client.get(f"{API}/{pid}", headers=alice["headers"]).json()["data"]["owner"]
    assert owner == {"id": alice["id"], "name": "Alice", "email": "alice@example.com"}


def test_create_defaults(client, alice):
    playlist = create_playlist(client, alice, name="  Chill  ")
    assert playlist["name"] == "Chill"
    assert playlist["description"] == ""
    assert playlist["coverImage"] == ""
    assert playlist["isPublic"] is False
    assert playlist["userId"] == alice["id"]


def test_create_requires_name(client, alice):
    for body in ({}, {"name": ""}, {"name": "   "}):
        r = client.post(API, json=body, headers=alice["headers"])
        assert r.status_code == 400
        assert r.json()["success"] is False


def test_create_and_delete_keep_owner_list_in_sync(client, alice):
    first = create_playlist(client, alice, name="One")["id"]
    second = create_playlist(client, alice, name="Two")["id"]

    me = client.get("/api/v1/users/me", headers=alice["headers"]).json()["data"]
    assert me["playlistIds"] == [first, second]

    client.delete(f"{API}/{first}", headers=alice["headers"])
    me = client.get("/api/v1/users/me", headers=alice["headers"]).json()["data"]
    assert me["playlistIds"] == [second]


def test_list_owned_newest_first(client, alice, bob):
    create_playlist(client, alice, name="Old")
    create_playlist(client, bob, name="Not mine")
    create_playlist(client, alice, name="New")

    r = client.get(API, headers=alice["headers"])
    assert r.status_code == 200
    assert [p["name"] for p in r.json()["data"]] == ["New", "Old"]


def test_update_applies_only_present_fields(client, alice):
    pid = create_playlist(client, alice, name="Gym", description="loud", coverImage="https://img/1")["id"]

    r = client.put(f"{API}/{pid}", json={"description": "louder"}, headers=alice["headers"])
    data = r.json()["data"]
    assert data["name"] == "Gym"
    assert data["description"] == "louder"
    assert data["coverImage"] == "https://img/1"

    r = client.put(f"{API}/{pid}", json={"coverImage": None}, headers=alice["headers"])
    assert r.json()["data"]["coverImage"] == ""
    assert r.json()["data"]["description"] == "louder"


def test_update_rejects_null_name(client, alice):
    pid = create_playlist(client, alice)["id"]
    r = client.put(f"{API}/{pid}", json={"name": None}, headers=alice["headers"])
    assert r.status_code == 400
    assert client.get(f"{API}/{pid}", headers=alice["headers"]).json()["data"]["name"] == "Road Trip"


def test_remove_absent_song_is_noop(client, alice, make_song):
    s1, s2 = make_song(), make_song()
    pid = create_playlist(client, alice)["id"]
    client.post(f"{API}/{pid}/songs", json={"songId": s1}, headers=alice["headers"])

    r = client.delete(f"{API}/{pid}/songs/{s2}", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["songIds"] == [s1]


def test_reorder_replaces_verbatim(client, alice, make_song):
    s1, s2, s3 = make_song(), make_song(), make_song()
    pid = create_playlist(client, alice)["id"]
    client.post(f"{API}/{pid}/songs", json={"songId": s1}, headers=alice["headers"])

    r = client.put(f"{API}/{pid}/reorder", json={"songIds": [s3, s2]}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["data"]["songIds"] == [s3, s2]


def test_reorder_rejects_duplicates_and_missing_body(client, alice, make_song):
    s1 = make_song()
    pid = create_playlist(client, alice)["id"]

    r = client.put(f"{API}/{pid}/reorder", json={"songIds": [s1, s1]}, headers=alice["headers"])
    assert r.status_code == 400
    r = client.put(f"{API}/{pid}/reorder", json={}, headers=alice["headers"])
    assert r.status_code == 400


def test_add_song_validation(client, alice):
    pid = create_playlist(client, alice)["id"]

    r = client.post(f"{API}/{pid}/songs", json={}, headers=alice["headers"])
    assert r.status_code == 400
    r = client.post(f"{API}/{pid}/songs", json={"songId": 999}, headers=alice["headers"])
    assert r.status_code == 404
    assert r.json()["message"] == "Song not found"


def test_missing_playlist(client, alice):
    assert client.get(f"{API}/404", headers=alice["headers"]).status_code == 404
    assert client.put(f"{API}/404", json={"name": "x"}, headers=alice["headers"]).status_code == 404
    assert client.delete(f"{API}/404", headers=alice["headers"]).status_code == 404


def test_playlists_require_token(client, alice):
    pid = create_playlist(client, alice)["id"]

    r = client.get(API)
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Not authenticated", "error": None}
    assert client.get(f"{API}/{pid}").status_code == 401
    assert client.post(API, json={"name": "x"}).status_code == 401


def test_deleted_song_is_dropped_from_playlists(client, alice, relay, make_song):
    s1, s2 = make_song(), make_song()
    pid = create_playlist(client, alice)["id"]
    client.post(f"{API}/{pid}/songs", json={"songId": s1}, headers=alice["headers"])
    client.post(f"{API}/{pid}/songs", json={"songId": s2}, headers=alice["headers"])

    assert client.delete(f"/api/v1/songs/{s1}", headers=alice["headers"]).status_code == 200
    data = client.get(f"{API}/{pid}", headers=alice["headers"]).json()["data"]
    assert data["songIds"] == [s2]
    assert data["songCount"] == 1


def test_second_user_sees_only_own_playlists(client, alice):
    carol = register(client, "Carol", "carol@example.com")
    create_playlist(client, alice)
    assert client.get(API, headers=carol["headers"]).json()["data"] == []
