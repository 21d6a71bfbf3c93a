from fastapi.testclient import TestClient

from app.main import app

API = "/api/v1"

def test_requires_token(client):
    r = client.post(f"{API}/likes/posts/p1")
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Not authenticated"}

def test_bad_token(client):
    r = client.get(f"{API}/reactions/p1", headers={"Authorization": "Bearer nonsense"})
    assert r.status_code == 401
    assert r.json()["success"] is False

def test_set_reaction_envelope(client, auth):
    r = client.post(f"{API}/reactions/p1", json={"reactionType": "HEART"}, headers=auth("u1"))
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["type"] == "Heart"
    assert body["data"]["counts"]["Heart"] == 1
    assert body["data"]["total"] == 1
    assert body["data"]["actorReaction"]["reactionType"] == "Heart"
    assert ["post", "p1"] in body["invalidate"]
    assert ["reactedPosts", "u1"] in body["invalidate"]
    assert ["feed"] in body["invalidate"]

def test_change_reaction_then_read(client, auth):
    client.post(f"{API}/reactions/p1", json={"reactionType": "HEART"}, headers=auth("u1"))
    client.post(f"{API}/reactions/p1", json={"reactionType": "Sad"}, headers=auth("u1"))

    r = client.get(f"{API}/reactions/p1", headers=auth("u3"))
    assert r.status_code == 200
    assert r.headers["Cache-Control"] == "private, max-age=30"
    data = r.json()["data"]
    assert data["counts"]["Heart"] == 0
    assert data["counts"]["Sad"] == 1
    assert data["reactions"][0]["user"]["username"] == "user_u1"

    r = client.get(f"{API}/reactions/p1/me", headers=auth("u1"))
    assert r.json()["data"] == {"reacted": True, "reactionType": "Sad"}

def test_invalid_reaction_type(client, auth):
    r = client.post(f"{API}/reactions/p1", json={"reactionType": "Love"}, headers=auth("u1"))
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["error"].startswith("Invalid reaction type")

def test_missing_body_is_bad_request(client, auth):
    r = client.post(f"{API}/reactions/p1", json={}, headers=auth("u1"))
    assert r.status_code == 400
    assert r.json()["success"] is False

def test_reaction_on_missing_post(client, auth):
    r = client.post(f"{API}/reactions/nope", json={"reactionType": "Like"}, headers=auth("u1"))
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Post not found"}

def test_remove_reaction_without_one(client, auth):
    r = client.delete(f"{API}/reactions/p1", headers=auth("u1"))
    assert r.status_code == 200
    assert r.json()["data"]["removed"] is False

def test_toggle_like(client, auth):
    r = client.post(f"{API}/likes/posts/p1", headers=auth("u1"))
    assert r.json()["data"] == {"liked": True, "likeCount": 1}
    assert r.json()["message"] == "Post liked successfully"

    r = client.post(f"{API}/likes/posts/p1", headers=auth("u1"))
    assert r.json()["data"] == {"liked": False, "likeCount": 0}

    r = client.get(f"{API}/likes/posts/p1/check", headers=auth("u1"))
    assert r.json()["data"] == {"liked": False}

def test_share_flow(client, auth):
    r = client.post(f"{API}/shares/post/p1", headers=auth("u1"))
    assert r.status_code == 201
    share_id = r.json()["data"]["id"]
    assert r.json()["data"]["audience"] == "Public"
    assert r.json()["data"]["post"]["id"] == "p1"

    r = client.post(f"{API}/shares/post/p1", json={"shareCaption": "again"}, headers=auth("u1"))
    assert r.status_code == 200
    assert r.json()["data"]["id"] == share_id
    assert r.json()["data"]["shareCaption"] == "again"

    r = client.post(f"{API}/shares/{share_id}/reactions", json={"reactionType": "wow"}, headers=auth("u3"))
    assert r.json()["data"]["counts"]["Wow"] == 1
    assert ["share", share_id] in r.json()["invalidate"]

    r = client.post(f"{API}/share-comments/{share_id}/comments", json={"content": "ha"}, headers=auth("u3"))
    assert r.status_code == 201

    r = client.get(f"{API}/shares/{share_id}", headers=auth("u3"))
    assert r.json()["data"]["reactionCount"] == 1
    assert r.json()["data"]["commentCount"] == 1

    r = client.delete(f"{API}/shares/{share_id}", headers=auth("u3"))
    assert r.status_code == 403

    r = client.delete(f"{API}/shares/{share_id}", headers=auth("u1"))
    assert r.status_code == 200
    assert r.json()["data"] == {"shareId": share_id, "postId": "p1", "shareCount": 0}

    r = client.get(f"{API}/share-comments/{share_id}/comments", headers=auth("u1"))
    assert r.status_code == 404
    assert r.json()["error"] == "Share not found"

def test_comment_pagination(client, auth):
    for i in range(11):
        client.post(f"{API}/comments/posts/p1", json={"content": f"comment {i}"}, headers=auth("u1"))

    r = client.get(f"{API}/comments/posts/p1?page=1&limit=10", headers=auth("u1"))
    assert len(r.json()["data"]) == 10
    assert r.json()["pagination"] == {"currentPage": 1, "totalPages": 2, "total": 11, "hasMore": True}

    r = client.get(f"{API}/comments/posts/p1?page=2&limit=10", headers=auth("u1"))
    assert len(r.json()["data"]) == 1
    assert r.json()["pagination"]["hasMore"] is False

def test_empty_comment(client, auth):
    r = client.post(f"{API}/comments/posts/p1", json={"content": "   "}, headers=auth("u1"))
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Comment content is required"}

def test_non_author_cannot_delete_comment(client, auth):
    r = client.post(f"{API}/comments/posts/p1", json={"content": "mine"}, headers=auth("u1"))
    comment_id = r.json()["data"]["id"]
    assert ["comments", "p1"] in r.json()["invalidate"]

    r = client.delete(f"{API}/comments/{comment_id}", headers=auth("u3"))
    assert r.status_code == 403
    assert r.json()["success"] is False

    r = client.get(f"{API}/comments/posts/p1", headers=auth("u3"))
    assert [c["id"] for c in r.json()["data"]] == [comment_id]

def test_post_with_counts(client, auth):
    client.post(f"{API}/likes/posts/p1", headers=auth("u1"))
    client.post(f"{API}/reactions/p1", json={"reactionType": "Laughing"}, headers=auth("u3"))
    client.post(f"{API}/shares/post/p1", headers=auth("u3"))

    r = client.get(f"{API}/posts/p1", headers=auth("u3"))
    data = r.json()["data"]
    assert data["likeCount"] == 1
    assert data["reactionCount"] == 1
    assert data["shareCount"] == 1
    assert data["isLiked"] is False
    assert data["userReaction"] == "Laughing"
    assert data["author"]["id"] == "u2"

def test_private_post_hidden(client, auth):
    assert client.get(f"{API}/posts/p_private", headers=auth("u1")).status_code == 403
    assert client.get(f"{API}/posts/p_private", headers=auth("u2")).status_code == 200

def test_create_and_delete_post(client, auth):
    r = client.post(f"{API}/posts", json={"content": "new"}, headers=auth("u1"))
    assert r.status_code == 201
    post_id = r.json()["data"]["id"]

    assert client.delete(f"{API}/posts/{post_id}", headers=auth("u3")).status_code == 403
    r = client.delete(f"{API}/posts/{post_id}", headers=auth("u1"))
    assert r.status_code == 200
    assert ["post", post_id] in r.json()["invalidate"]
    assert client.get(f"{API}/posts/{post_id}", headers=auth("u1")).status_code == 404

def test_notifications(client, auth):
    client.post(f"{API}/likes/posts/p1", headers=auth("u1"))
    client.post(f"{API}/likes/posts/p2", headers=auth("u2"))

    r = client.get(f"{API}/notifications?unread_only=true", headers=auth("u2"))
    items = r.json()["data"]
    assert len(items) == 1
    assert items[0]["type"] == "like"
    assert items[0]["actor"]["id"] == "u1"

    r = client.put(f"{API}/notifications/{items[0]['id']}", json={"isRead": True}, headers=auth("u1"))
    assert r.status_code == 403

    r = client.put(f"{API}/notifications/read-all", headers=auth("u2"))
    assert r.json()["data"] == {"updated": 1}

def test_invalidation_rules_are_public(client):
    r = client.get(f"{API}/cache/invalidation-rules")
    assert r.status_code == 200
    assert r.json()["data"]["reactionStaleSeconds"] == 30
    assert "toggle_like" in r.json()["data"]["rules"]

def test_unexpected_error_keeps_envelope(client, auth, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("database went away")
    monkeypatch.setattr("app.modules.comments.api.router.list_comments", broken)

    r = TestClient(app, raise_server_exceptions=False).get(f"{API}/comments/posts/p1", headers=auth("u1"))
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Something went wrong"}

def test_legacy_check_paths(client, auth):
    client.post(f"{API}/reactions/p1", json={"reactionType": "Wow"}, headers=auth("u1"))
    client.post(f"{API}/likes/posts/p2", headers=auth("u1"))

    r = client.get(f"{API}/reactions/p1/check", headers=auth("u1"))
    assert r.json()["data"] == {"reacted": True, "reactionType": "Wow"}

    r = client.get(f"{API}/likes/user/u1/liked", headers=auth("u3"))
    assert [item["post"]["id"] for item in r.json()["data"]] == ["p2"]
