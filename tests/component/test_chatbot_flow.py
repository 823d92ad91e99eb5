"""Component tests for the chatbot endpoints with a scripted provider."""

import pytest
from fastapi.testclient import TestClient


@pytest.mark.component
class TestChatbotFlow:
    """End-to-end chatbot scenarios."""

    def test_empty_message(self, client: TestClient) -> None:
        response = client.post("/api/chatbot/chat", json={"message": ""})

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Message is required"}

    def test_chat_includes_available_dishes(self, client: TestClient, store, adapter) -> None:
        """Test that only available dishes appear in the prompt."""
        store.seed(
            "dishes", title="Seared Salmon", description="Lemon butter", category="mains",
            is_available=True,
        )
        store.seed(
            "dishes", title="Winter Stew", description="Seasonal", category="specials",
            is_available=False,
        )

        response = client.post("/api/chatbot/chat", json={"message": "Any fish?"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["aiResponse"] == "Our chef recommends the salmon."
        assert data["contextIncluded"] is True
        prompt = adapter.prompts[0]
        assert "- Seared Salmon: Lemon butter (mains)" in prompt
        assert "Winter Stew" not in prompt

    def test_chat_survives_store_outage(self, client: TestClient, store, adapter) -> None:
        store.failing_tables.add("dishes")

        response = client.post("/api/chatbot/chat", json={"message": "Hello"})

        assert response.status_code == 200
        assert response.json()["data"]["contextIncluded"] is False
        assert "Our Current Menu Items:" not in adapter.prompts[0]

    def test_offline_gateway(self, offline_client: TestClient) -> None:
        """Test status and chat when no credential was configured at startup."""
        status = offline_client.get("/api/chatbot/status").json()["data"]
        chat = offline_client.post("/api/chatbot/chat", json={"message": "Hello"})

        assert status["aiAvailable"] is False
        assert status["apiStatus"] == "disconnected"
        assert chat.status_code == 503

    def test_connection_test(self, client: TestClient) -> None:
        response = client.get("/api/chatbot/test")

        assert response.status_code == 200
        assert response.json()["success"] is True
