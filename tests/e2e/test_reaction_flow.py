"""End-to-end tests for the reaction endpoints."""

from uuid import uuid4

from tests.harness import create_client_fixture

client = create_client_fixture()

ALICE = {"X-Visitor-Id": "alice-visitor-key"}
BOB = {"X-Visitor-Id": "bob-visitor-key"}


def create_entry(client, content="react to me") -> str:
    response = client.post("/entries", json={"content": content}, headers=ALICE)
    return response.json()["entry"]["id"]


class TestReactions:
    """Like, dislike and clear."""

    def test_like_switch_and_clear(self, client):
        # Arrange
        entry_id = create_entry(client)

        # Act
        liked = client.post(
            "/reactions", json={"entry_id": entry_id, "value": "like"}, headers=BOB
        )
        switched = client.post(
            "/reactions", json={"entry_id": entry_id, "value": -1}, headers=BOB
        )
        cleared = client.delete(
            "/reactions", params={"entry_id": entry_id}, headers=BOB
        )
        cleared_again = client.delete(
            "/reactions", params={"entry_id": entry_id}, headers=BOB
        )

        # Assert
        assert liked.status_code == 200
        assert liked.json()["stats"] == {"like": 1, "dislike": 0, "my_reaction": 1}
        assert switched.json()["stats"] == {"like": 0, "dislike": 1, "my_reaction": -1}
        assert cleared.json()["removed"] is True
        assert cleared.json()["stats"]["dislike"] == 0
        assert cleared_again.status_code == 200
        assert cleared_again.json()["removed"] is False

    def test_batch_stats_are_personalised(self, client):
        # Arrange
        first = create_entry(client, "first")
        second = create_entry(client, "second")
        client.post("/reactions", json={"entry_id": first, "value": 1}, headers=BOB)
        client.post("/reactions", json={"entry_id": first, "value": 1}, headers=ALICE)

        # Act
        as_bob = client.get(
            "/reactions", params={"ids": f"{first},{second}"}, headers=BOB
        ).json()
        anonymous = client.get("/reactions", params={"ids": first}).json()

        # Assert
        assert as_bob["stats"][first] == {"like": 2, "dislike": 0, "my_reaction": 1}
        assert as_bob["stats"][second] == {"like": 0, "dislike": 0, "my_reaction": 0}
        assert anonymous["stats"][first]["my_reaction"] == 0

    def test_stats_are_shown_on_entries(self, client):
        # Arrange
        entry_id = create_entry(client)
        client.post("/reactions", json={"entry_id": entry_id, "value": "dislike"}, headers=BOB)

        # Act
        listing = client.get("/entries", headers=BOB).json()

        # Assert
        assert listing["entries"][0]["stats"] == {
            "like": 0,
            "dislike": 1,
            "my_reaction": -1,
        }

    def test_requires_identity(self, client):
        entry_id = create_entry(client)

        response = client.post("/reactions", json={"entry_id": entry_id, "value": 1})

        assert response.status_code == 401

    def test_invalid_value(self, client):
        entry_id = create_entry(client)

        response = client.post(
            "/reactions", json={"entry_id": entry_id, "value": "love"}, headers=BOB
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_unknown_entry(self, client):
        response = client.post(
            "/reactions", json={"entry_id": str(uuid4()), "value": 1}, headers=BOB
        )

        assert response.status_code == 404

    def test_deleted_entry(self, client):
        # Arrange
        entry_id = create_entry(client)
        client.delete(f"/entries/{entry_id}", headers=ALICE)

        # Act
        response = client.post(
            "/reactions", json={"entry_id": entry_id, "value": 1}, headers=BOB
        )

        # Assert
        assert response.status_code == 409

    def test_malformed_ids(self, client):
        response = client.get("/reactions", params={"ids": "abc,def"})

        assert response.status_code == 400
