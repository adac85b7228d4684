"""End-to-end tests for comment routes."""


def comment(client, content="Great post", ip=None, **extra):
    headers = {"X-Forwarded-For": ip} if ip else {}
    payload = {"name": "Ada", "email": "ada@example.com", "content": content, **extra}
    return client.post("/api/posts/hello-world/comments", json=payload, headers=headers)


class TestSubmitComment:
    """POST /api/posts/{slug}/comments."""

    def test_comment_is_created(self, client, published):
        response = comment(client)

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["reparented"] is False
        assert body["comment"]["name"] == "Ada"
        assert body["comment"]["parentId"] is None
        assert "email" not in body["comment"]

    def test_two_char_comment_is_rejected(self, client, published):
        response = comment(client, content="hi")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation"
        assert "3" in body["issues"]["content"][0]
        assert client.get("/api/posts/hello-world/comments").json()["total"] == 0

    def test_honeypot(self, client, published):
        response = comment(client, honeypot="filled by a bot")

        assert response.status_code == 400
        assert response.json()["issues"] == {"honeypot": ["Bot detected"]}

    def test_invalid_json_body(self, client, published):
        response = client.post(
            "/api/posts/hello-world/comments",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation"

    def test_unknown_post(self, client):
        response = client.post(
            "/api/posts/missing/comments",
            json={"name": "Ada", "email": "ada@example.com", "content": "Hello"},
        )

        assert response.status_code == 404
        assert response.json() == {"error": "post not found"}

    def test_unknown_parent(self, client, published):
        response = comment(client, parentId=999)

        assert response.status_code == 400
        assert response.json() == {"error": "parent comment not found"}

    def test_eleventh_comment_is_rate_limited(self, client, published):
        for _ in range(10):
            assert comment(client, ip="203.0.113.9").status_code == 200

        response = comment(client, ip="203.0.113.9")

        assert response.status_code == 429
        body = response.json()
        assert body["error"] == "rate limit exceeded"
        assert 1 <= body["retryAfter"] <= 900
        assert response.headers["Retry-After"] == str(body["retryAfter"])
        assert comment(client, ip="198.51.100.4").status_code == 200

    def test_deep_reply_is_reparented(self, client, published):
        parent_id = None
        ids = []
        for _ in range(4):
            body = comment(client, parentId=parent_id).json()
            parent_id = body["comment"]["id"]
            ids.append(parent_id)

        body = comment(client, parentId=ids[-1]).json()

        assert body["reparented"] is True
        assert body["comment"]["parentId"] == ids[2]


class TestGetComments:
    """GET /api/posts/{slug}/comments."""

    def test_nested_tree(self, client, published):
        root = comment(client, content="first root").json()["comment"]
        comment(client, content="reply", parentId=root["id"])
        comment(client, content="second root")

        response = client.get("/api/posts/hello-world/comments")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert [item["content"] for item in body["items"]] == ["first root", "second root"]
        assert body["items"][0]["replies"][0]["content"] == "reply"
        assert body["items"][0]["replies"][0]["parentId"] == root["id"]
        assert "email" not in body["items"][0]

    def test_unknown_post(self, client):
        response = client.get("/api/posts/missing/comments")

        assert response.status_code == 404
