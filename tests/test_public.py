"""Tests for GET /posts, GET /posts/{slug} and the generic error response."""

from fastapi.testclient import TestClient

from shared.posts import get_post_repository
from tests.conftest import auth_headers


def _seed(client: TestClient, slug: str = "hello", title: str = "Hello") -> None:
    client.post(
        "/posts/admin/new",
        data={"title": title, "slug": slug, "markdown": "# hi"},
        headers=auth_headers(),
        follow_redirects=False,
    )


class BrokenRepository:
    def list_listings(self):
        raise RuntimeError("posts table unavailable")


class TestListPosts:
    def test_empty(self, client: TestClient):
        r = client.get("/posts")
        assert r.status_code == 200
        assert r.json() == {"posts": []}

    def test_lists_all_posts_without_auth(self, client: TestClient):
        _seed(client, "hello", "Hello")
        _seed(client, "second", "Second")
        r = client.get("/posts")
        assert r.status_code == 200
        posts = sorted(r.json()["posts"], key=lambda p: p["slug"])
        assert posts == [
            {"slug": "hello", "title": "Hello"},
            {"slug": "second", "title": "Second"},
        ]

    def test_repository_failure_returns_generic_error(self, client: TestClient):
        client.app.dependency_overrides[get_post_repository] = BrokenRepository
        lenient = TestClient(client.app, raise_server_exceptions=False)
        r = lenient.get("/posts")
        assert r.status_code == 500
        assert r.json() == {"detail": "posts table unavailable"}


class TestGetPost:
    def test_existing_post(self, client: TestClient):
        _seed(client)
        r = client.get("/posts/hello")
        assert r.status_code == 200
        assert r.json()["markdown"] == "# hi"

    def test_missing_post_returns_404(self, client: TestClient):
        r = client.get("/posts/does-not-exist")
        assert r.status_code == 404
        assert r.json()["detail"] == "This post does not exist"


def test_health(client: TestClient):
    assert client.get("/health").json() == {"status": "ok"}
