"""HTTP-level tests for the v1 freet, vote, moderation and feed routes."""

from datetime import timedelta

from fritter.models import AuditState


def test_create_and_fetch_freet(client, auth_headers, test_user):
    response = client.post(
        "/api/v1/freets/", json={"content": " first freet "}, headers=auth_headers(test_user)
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Your freet was created successfully."
    freet = body["freet"]
    assert freet["content"] == "first freet"
    assert freet["author_id"] == test_user.id
    assert freet["reports"] == {"spam": 0, "misinformation": 0, "offensive": 0}
    assert freet["cover"] == "none"
    assert freet["audit"] is None

    fetched = client.get(f"/api/v1/freets/{freet['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["content"] == "first freet"


def test_create_freet_requires_valid_token(client):
    response = client.post(
        "/api/v1/freets/",
        json={"content": "hello"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


def test_create_freet_too_long(client, auth_headers, test_user):
    response = client.post(
        "/api/v1/freets/", json={"content": "z" * 141}, headers=auth_headers(test_user)
    )
    assert response.status_code == 413


def test_create_freet_blank(client, auth_headers, test_user):
    response = client.post("/api/v1/freets/", json={"content": "  "}, headers=auth_headers(test_user))
    assert response.status_code == 400


def test_get_missing_freet(client):
    response = client.get("/api/v1/freets/31337")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_list_freets_by_author(client, make_freet, test_user, other_user):
    make_freet(test_user, "from alice")
    make_freet(other_user, "from bob")

    response = client.get("/api/v1/freets/", params={"author": "alice"})
    assert response.status_code == 200
    assert [item["content"] for item in response.json()] == ["from alice"]

    assert client.get("/api/v1/freets/", params={"author": "nobody"}).status_code == 404


def test_update_and_delete_require_authorship(client, auth_headers, test_user, test_freet):
    headers = auth_headers(test_user)
    update = client.put(f"/api/v1/freets/{test_freet.id}", json={"content": "hijack"}, headers=headers)
    assert update.status_code == 403

    delete = client.delete(f"/api/v1/freets/{test_freet.id}", headers=headers)
    assert delete.status_code == 403


def test_author_updates_and_deletes(client, auth_headers, clock, other_user, test_freet):
    headers = auth_headers(other_user)
    clock.advance(timedelta(minutes=1))

    update = client.put(f"/api/v1/freets/{test_freet.id}", json={"content": "edited"}, headers=headers)
    assert update.status_code == 200
    assert update.json()["freet"]["content"] == "edited"

    delete = client.delete(f"/api/v1/freets/{test_freet.id}", headers=headers)
    assert delete.status_code == 200
    assert delete.json()["freet"] is None
    assert client.get(f"/api/v1/freets/{test_freet.id}").status_code == 404


def test_vote_toggle_flow(client, auth_headers, test_user, test_freet):
    headers = auth_headers(test_user)
    url = f"/api/v1/freets/{test_freet.id}/vote"

    response = client.put(url, json={"kind": "downvote"}, headers=headers)
    assert response.status_code == 200
    freet = response.json()["freet"]
    assert (freet["upvotes"], freet["downvotes"]) == (0, 1)
    assert freet["flagged"] is True
    assert freet["cover"] == "controversial"

    my_vote = client.get(f"/api/v1/freets/{test_freet.id}/my-vote", headers=headers)
    assert my_vote.json() == {"freet_id": test_freet.id, "kind": "downvote"}

    response = client.put(url, json={"kind": "downvote"}, headers=headers)
    assert response.json()["freet"]["downvotes"] == 0
    my_vote = client.get(f"/api/v1/freets/{test_freet.id}/my-vote", headers=headers)
    assert my_vote.json()["kind"] is None


def test_vote_unknown_kind(client, auth_headers, test_user, test_freet):
    response = client.put(
        f"/api/v1/freets/{test_freet.id}/vote",
        json={"kind": "meh"},
        headers=auth_headers(test_user),
    )
    assert response.status_code == 400


def test_report_opens_audit_and_blocks_further_reports(
    client, auth_headers, make_user, make_freet, other_user
):
    freet = make_freet(other_user, downvotes=12)
    url = f"/api/v1/freets/{freet.id}/report"

    first = client.put(url, json={"category": "misinformation"}, headers=auth_headers(make_user()))
    assert first.status_code == 200
    assert first.json()["freet"]["audit"] is None

    second = client.put(url, json={"category": "misinformation"}, headers=auth_headers(make_user()))
    audit = second.json()["freet"]["audit"]
    assert audit["state"] == "testing"
    assert audit["category"] == "misinformation"
    assert second.json()["freet"]["cover"] == "misinformation"

    third = client.put(url, json={"category": "spam"}, headers=auth_headers(make_user()))
    assert third.status_code == 409


def test_report_unknown_category(client, auth_headers, test_user, test_freet):
    response = client.put(
        f"/api/v1/freets/{test_freet.id}/report",
        json={"category": "rude"},
        headers=auth_headers(test_user),
    )
    assert response.status_code == 400


def test_audit_vote_flow(client, auth_headers, clock, make_user, make_freet, other_user):
    freet = make_freet(other_user, downvotes=12)
    freet_id = freet.id
    for _ in range(2):
        client.put(
            f"/api/v1/freets/{freet_id}/report",
            json={"category": "spam"},
            headers=auth_headers(make_user()),
        )
    url = f"/api/v1/freets/{freet_id}/audit-vote"

    pending = client.put(url, json={"confirm": True}, headers=auth_headers(make_user()))
    assert pending.status_code == 200
    assert pending.json()["state"] == AuditState.TESTING
    assert pending.json()["message"] == "Your audit vote has been recorded."

    clock.advance(timedelta(hours=12, minutes=1))
    resolved = client.put(url, json={"confirm": True}, headers=auth_headers(make_user()))
    body = resolved.json()
    assert body["state"] == "failed"
    assert body["deleted"] is True
    assert body["freet"] is None
    assert client.get(f"/api/v1/freets/{freet_id}").status_code == 404


def test_audit_vote_without_audit(client, auth_headers, test_user, test_freet):
    response = client.put(
        f"/api/v1/freets/{test_freet.id}/audit-vote",
        json={"confirm": False},
        headers=auth_headers(test_user),
    )
    assert response.status_code == 409


def test_feed_tabs(client, auth_headers, make_user, make_freet, follow, test_user):
    friend = make_user("friend")
    celebrity = make_user("celebrity", verified=True)
    follow(test_user, friend)
    make_freet(friend, "friend freet", upvotes=1)
    make_freet(celebrity, "celebrity freet", upvotes=3)
    headers = auth_headers(test_user)

    home = client.get("/api/v1/feed/", headers=headers)
    assert home.status_code == 200
    assert [item["content"] for item in home.json()] == ["friend freet"]

    verified = client.get("/api/v1/feed/verified", params={"sort": "new"}, headers=headers)
    assert [item["content"] for item in verified.json()] == ["celebrity freet"]

    discovery = client.get("/api/v1/feed/discovery", headers=headers)
    assert discovery.status_code == 200
    assert len(discovery.json()) == 1


def test_feed_rejects_unknown_tab_and_sort(client, auth_headers, test_user):
    headers = auth_headers(test_user)
    assert client.get("/api/v1/feed/trending", headers=headers).status_code == 400
    assert (
        client.get("/api/v1/feed/home", params={"sort": "loudest"}, headers=headers).status_code
        == 400
    )
