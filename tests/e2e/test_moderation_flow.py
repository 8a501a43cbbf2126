"""End-to-end tests for the admin moderation endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from guestbook.config import Settings
from guestbook.domain.model import ChatMessage
from guestbook.domain.value import ChatMessageId, ChatSessionId
from guestbook.interface.api.app import create_app
from guestbook.persistence.repository.inmemory import InMemoryDatabase
from guestbook.util.di.container import setup_di
from guestbook.util.jwt import create_token
from tests.di import build_test_container

ADMIN_EMAIL = "moderator@example.com"
ALICE = {"X-Visitor-Id": "alice-visitor-key"}


@pytest.fixture
def container(monkeypatch):
    monkeypatch.setenv("AUTH__ADMIN_EMAIL", ADMIN_EMAIL)
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    return TestClient(app_instance)


@pytest.fixture
def admin_headers(container):
    token = create_token(
        str(uuid4()), Settings().auth, email=ADMIN_EMAIL.upper(), email_verified=True
    )
    return {"Authorization": f"Bearer {token}"}


async def seed_chat_message(container, content: str) -> ChatMessage:
    db = await container.get(InMemoryDatabase)
    return db.add_chat_message(
        ChatMessage(
            id=ChatMessageId(uuid4()),
            session_id=ChatSessionId(uuid4()),
            role="user",
            content=content,
        )
    )


class TestModerationAccess:
    """Admin gate."""

    def test_visitor_is_forbidden(self, client):
        response = client.get("/admin/posts", headers=ALICE)

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_unverified_admin_email_is_forbidden(self, client):
        token = create_token(str(uuid4()), Settings().auth, email=ADMIN_EMAIL)

        response = client.get(
            "/admin/authors", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403

    def test_admin_is_reported_by_me(self, client, admin_headers):
        response = client.get("/me", headers=admin_headers)

        assert response.json()["is_admin"] is True


class TestModerationFlow:
    """Listing and toggling posts."""

    @pytest.mark.asyncio
    async def test_hide_and_unhide_chat_message(self, client, container, admin_headers):
        # Arrange
        message = await seed_chat_message(container, "rude chat line")
        global_id = f"chat:{message.id}"

        # Act
        hidden = client.patch(
            "/admin/posts", json={"id": global_id, "deleted": True}, headers=admin_headers
        )
        listing = client.get("/admin/posts", headers=admin_headers).json()
        detail = client.get(f"/admin/posts/{global_id}", headers=admin_headers).json()
        shown = client.patch(
            "/admin/posts", json={"id": global_id, "deleted": False}, headers=admin_headers
        )

        # Assert
        assert hidden.status_code == 200
        assert hidden.json()["deleted"] is True
        assert global_id not in [p["id"] for p in listing["posts"]]
        assert detail["deleted"] is True
        assert detail["content"] == "rude chat line"
        assert shown.json()["deleted"] is False

    def test_entries_are_listed_and_hidden_through_entry_deletion(
        self, client, admin_headers
    ):
        # Arrange
        entry = client.post(
            "/entries", json={"content": "buy cheap stuff"}, headers=ALICE
        ).json()["entry"]
        client.post("/entries", json={"content": "fine post"}, headers=ALICE)

        # Act
        before = client.get(
            "/admin/posts", params={"source": "feedback", "q": "cheap"}, headers=admin_headers
        ).json()
        toggled = client.patch(
            "/admin/posts", json={"id": entry["id"], "deleted": True}, headers=admin_headers
        )
        public = client.get(f"/entries/{entry['id']}").json()
        restored = client.post(f"/entries/{entry['id']}/restore", headers=admin_headers)

        # Assert
        assert [p["id"] for p in before["posts"]] == [f"feedback:{entry['id']}"]
        assert before["total"] == 1
        assert toggled.json()["id"] == f"feedback:{entry['id']}"
        assert public["entry"]["status"] == "deleted"
        assert public["entry"]["content"] == ""
        assert restored.status_code == 200
        assert restored.json() == {
            "entry_id": entry["id"],
            "status": "active",
            "content_retained": False,
        }

    def test_unknown_post(self, client, admin_headers):
        response = client.get(f"/admin/posts/chat:{uuid4()}", headers=admin_headers)

        assert response.status_code == 404

    def test_malformed_global_id(self, client, admin_headers):
        response = client.patch(
            "/admin/posts", json={"id": "email:123", "deleted": True}, headers=admin_headers
        )

        assert response.status_code == 400

    def test_author_groups(self, client, admin_headers):
        # Arrange
        client.post("/entries", json={"content": "one"}, headers=ALICE)
        client.post("/entries", json={"content": "two"}, headers=ALICE)

        # Act
        response = client.get("/admin/authors", headers=admin_headers)

        # Assert
        assert response.status_code == 200
        authors = response.json()["authors"]
        assert authors[0]["group_key"] == "alice-visitor-key"
        assert authors[0]["active_count"] == 2
