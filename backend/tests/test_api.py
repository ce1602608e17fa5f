"""
End-to-end tests through the HTTP layer (FastAPI TestClient, in-memory store).
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_clock
from main import app
from middleware.jwt_session import create_access_token
from repositories import Repositories, get_repositories


@pytest.fixture
def client(store, clock):
    app.dependency_overrides[get_repositories] = lambda: Repositories.in_memory(store)
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(account):
    return {"Authorization": f"Bearer {create_access_token(account)}"}


@pytest.fixture
def admin(user):
    return user("editor@example.com", admin=True)


@pytest.fixture
def reader(user):
    return user("reader@example.com")


class TestFeed:

    def test_anonymous_feed(self, client, article, theme):
        article("Fresh", hours_ago=1, themes=[theme("sports")])
        article("Stale", hours_ago=25)

        response = client.get("/api/articles")

        assert response.status_code == 200
        body = response.json()
        assert [a["header"] for a in body] == ["Fresh"]
        assert body[0]["formattedDate"] == "10.03.2024 11:00:00"
        assert body[0]["themes"][0]["name"] == "sports"

    def test_personalized_feed(self, client, article, theme, user):
        sports, politics = theme("sports"), theme("politics")
        article("Vote", hours_ago=1, themes=[politics])
        article("Match", hours_ago=5, themes=[sports])
        article("Weather", hours_ago=2)
        fan = user("fan@example.com", prefer=[sports], forbid=[politics])

        response = client.get("/api/articles", headers=bearer(fan))

        assert [a["header"] for a in response.json()] == ["Match", "Weather"]

    def test_invalid_token_reads_as_anonymous(self, client, article):
        article("Fresh", hours_ago=1)

        response = client.get("/api/articles", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 200
        assert [a["header"] for a in response.json()] == ["Fresh"]

    def test_token_for_unknown_user_is_rejected(self, client, store, reader):
        token = bearer(reader)
        store.users.clear()

        response = client.get("/api/articles", headers=token)

        assert response.status_code == 401


class TestArticleAdmin:

    def test_create_requires_admin(self, client, reader):
        payload = {"header": "H", "content": "C", "themes": "sport"}

        assert client.post("/api/articles", json=payload).status_code == 401
        assert client.post("/api/articles", json=payload, headers=bearer(reader)).status_code == 403

    def test_create_update_delete(self, client, admin, clock):
        created = client.post(
            "/api/articles",
            json={"header": "Derby", "content": "Report", "imageURL": "http://img/1.png",
                  "themes": "Sport, Sport!! Politics"},
            headers=bearer(admin),
        )
        assert created.status_code == 201
        body = created.json()
        assert body["imageURL"] == "http://img/1.png"
        assert [t["name"] for t in body["themes"]] == ["sport", "politics"]

        clock.advance(minutes=30)
        updated = client.put(
            f"/api/articles/{body['id']}",
            json={"header": "Derby (updated)", "content": "Report", "themes": "science"},
            headers=bearer(admin),
        )
        assert updated.status_code == 200
        assert updated.json()["header"] == "Derby (updated)"
        assert [t["name"] for t in updated.json()["themes"]] == ["science"]
        assert updated.json()["imageURL"] is None

        deleted = client.delete(f"/api/articles/{body['id']}", headers=bearer(admin))
        assert deleted.status_code == 200
        assert client.get(f"/api/articles/{body['id']}").status_code == 404

    def test_update_missing(self, client, admin):
        response = client.put(
            "/api/articles/ar_missing0",
            json={"header": "H", "content": "C", "themes": ""},
            headers=bearer(admin),
        )

        assert response.status_code == 404
        assert "ar_missing0" in response.json()["detail"]


class TestLikesAndComments:

    def test_like_toggle(self, client, article, reader):
        stored = article("Story")

        liked = client.post(f"/api/articles/{stored.id}/like", headers=bearer(reader))
        assert liked.json()["likes"] == [reader.user_id]
        assert liked.json()["likeCount"] == 1

        unliked = client.post(f"/api/articles/{stored.id}/like", headers=bearer(reader))
        assert unliked.json()["likes"] == []

    def test_like_requires_identity(self, client, article):
        stored = article("Story")

        assert client.post(f"/api/articles/{stored.id}/like").status_code == 401

    def test_comment_thread(self, client, article, reader):
        stored = article("Story")
        assert client.get(f"/api/articles/{stored.id}/comments").json() == []

        added = client.post(
            f"/api/articles/{stored.id}/comments",
            json={"text": "Nice"},
            headers=bearer(reader),
        )
        assert added.status_code == 201
        assert [c["text"] for c in added.json()["comments"]] == ["Nice"]

        thread = client.get(f"/api/articles/{stored.id}/comments").json()
        assert len(thread) == 1
        assert thread[0]["userId"] == reader.user_id
        assert thread[0]["formattedDate"] == "10.03.2024 12:00:00"

    def test_comments_of_missing_article(self, client):
        assert client.get("/api/articles/ar_missing0/comments").status_code == 404

    def test_delete_comment(self, client, article, reader):
        stored = article("Story", comments=["spam"])
        comment_id = stored.comments[0].id

        assert client.delete(f"/api/comments/{comment_id}", headers=bearer(reader)).status_code == 200
        assert client.delete(f"/api/comments/{comment_id}", headers=bearer(reader)).status_code == 404

    def test_article_delete_cascades(self, client, article, admin, reader):
        stored = article("Story", comments=["a", "b"])
        comment_ids = [c.id for c in stored.comments]

        assert client.delete(f"/api/articles/{stored.id}", headers=bearer(admin)).status_code == 200

        for comment_id in comment_ids:
            assert client.delete(f"/api/comments/{comment_id}", headers=bearer(reader)).status_code == 404


class TestUsers:

    def test_user_by_token_and_admin_flag(self, client, admin, reader):
        me = client.get("/api/userByToken", headers=bearer(reader))

        assert me.json()["email"] == "reader@example.com"
        assert client.get("/api/isUserAdmin", headers=bearer(reader)).json() is False
        assert client.get("/api/isUserAdmin", headers=bearer(admin)).json() is True

    def test_list_and_get(self, client, admin, reader):
        assert len(client.get("/api/users").json()) == 2
        assert client.get(f"/api/users/{reader.user_id}").json()["id"] == reader.user_id
        assert client.get("/api/users/no-such-user").status_code == 404
