"""End-to-end tests for the comments endpoints."""

import pytest
from fastapi.testclient import TestClient

from canopy.config import Settings
from canopy.domain.service import JWTService
from canopy.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    return TestClient(create_app(container=build_test_container()))


def login(client: TestClient, user_id: str, name: str) -> None:
    """Set the auth cookie for ``user_id`` on the test client."""
    token = JWTService(auth_settings=Settings().auth).create_token(user_id, name)
    client.cookies.set("auth_token", token)


def post_comment(client: TestClient, text: str, parent_id=None, entity="article-1"):
    response = client.post(
        f"/comments/{entity}", json={"comment": text, "parentId": parent_id}
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        """Should report healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready_with_in_memory_storage(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"


class TestCreateAndList:
    """Tests for POST and GET /comments/{entity_id}."""

    def test_empty_entity(self, client):
        """Should return an empty list for an entity without comments."""
        response = client.get("/comments/article-1")

        assert response.status_code == 200
        assert response.json() == []

    def test_create_requires_auth(self, client):
        """Should reject anonymous comments."""
        response = client.post("/comments/article-1", json={"comment": "Hi"})

        assert response.status_code == 401

    def test_create_and_list(self, client):
        """A created comment should be listed in wire form."""
        # Arrange
        login(client, "user-ada", "Ada")

        # Act
        created = post_comment(client, "Join the cleanup @Ben Ortiz!")
        listed = client.get("/comments/article-1").json()

        # Assert
        assert created["author"] == "Ada"
        assert created["authorId"] == "user-ada"
        assert created["mentions"] == ["Ben Ortiz"]
        assert created["parentId"] is None
        assert listed == [created]

    def test_author_comes_from_token(self, client):
        """Body author fields should not override the token identity."""
        # Arrange
        login(client, "user-ada", "Ada")

        # Act
        response = client.post(
            "/comments/article-1",
            json={"comment": "Hi", "author": "Mallory", "userId": "user-mallory"},
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["author"] == "Ada"
        assert response.json()["authorId"] == "user-ada"

    def test_blank_text_is_rejected(self, client):
        """Whitespace-only comments should be a 400."""
        login(client, "user-ada", "Ada")

        response = client.post("/comments/article-1", json={"comment": "   "})

        assert response.status_code == 400

    def test_too_long_text_is_rejected(self, client):
        """Comments over the limit should be a 400."""
        login(client, "user-ada", "Ada")

        response = client.post("/comments/article-1", json={"comment": "x" * 5001})

        assert response.status_code == 400

    def test_comments_are_scoped_per_entity(self, client):
        """Listing one entity should not show another's comments."""
        # Arrange
        login(client, "user-ada", "Ada")
        post_comment(client, "On the article")
        post_comment(client, "On the pitch", entity="pitch-7")

        # Act
        listed = client.get("/comments/pitch-7").json()

        # Assert
        assert [c["comment"] for c in listed] == ["On the pitch"]


class TestThread:
    """Tests for GET /comments/{entity_id}/thread."""

    def test_three_level_thread(self, client):
        """Replies should nest with paths and render hints."""
        # Arrange
        login(client, "user-ada", "Ada")
        a = post_comment(client, "A")
        b = post_comment(client, "B", parent_id=a["id"])
        c = post_comment(client, "C", parent_id=b["id"])

        # Act
        response = client.get("/comments/article-1/thread")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["entityId"] == "article-1"
        assert body["total"] == 3
        root = body["comments"][0]
        assert root["id"] == a["id"]
        assert root["path"] == "0"
        assert root["collapsible"] is True
        assert root["canDelete"] is True
        child = root["replies"][0]
        assert child["id"] == b["id"]
        assert child["path"] == "0-0"
        grandchild = child["replies"][0]
        assert grandchild["id"] == c["id"]
        assert grandchild["depth"] == 2
        assert grandchild["collapsible"] is False

    def test_anonymous_viewer_cannot_delete(self, client):
        """Without a token nothing is deletable."""
        # Arrange
        login(client, "user-ada", "Ada")
        post_comment(client, "A")
        client.cookies.clear()

        # Act
        body = client.get("/comments/article-1/thread").json()

        # Assert
        assert body["comments"][0]["canDelete"] is False


class TestDelete:
    """Tests for DELETE /comments/{entity_id}/{comment_id}."""

    def test_owner_deletes_with_replies(self, client):
        """Deleting should cascade and report the count."""
        # Arrange
        login(client, "user-ada", "Ada")
        a = post_comment(client, "A")
        login(client, "user-ben", "Ben")
        b = post_comment(client, "B", parent_id=a["id"])
        post_comment(client, "C", parent_id=b["id"])
        post_comment(client, "Other")
        login(client, "user-ada", "Ada")

        # Act
        response = client.delete(f"/comments/article-1/{a['id']}")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"deletedCount": 3}
        remaining = client.get("/comments/article-1").json()
        assert [c["comment"] for c in remaining] == ["Other"]

    def test_delete_requires_auth(self, client):
        """Anonymous deletes should be a 401."""
        response = client.delete("/comments/article-1/1")

        assert response.status_code == 401

    def test_delete_by_non_owner_is_forbidden(self, client):
        """Only the author may delete."""
        # Arrange
        login(client, "user-ada", "Ada")
        a = post_comment(client, "A")
        login(client, "user-ben", "Ben")

        # Act
        response = client.delete(f"/comments/article-1/{a['id']}")

        # Assert
        assert response.status_code == 403

    def test_delete_missing_is_not_found(self, client):
        """Unknown comments should be a 404."""
        login(client, "user-ada", "Ada")

        response = client.delete("/comments/article-1/404")

        assert response.status_code == 404
